import plotly.express as px
import streamlit as st
from streamlit_option_menu import option_menu

# Use absolute imports so `streamlit run conscalc/dashboard.py` works
from conscalc.config import load_config
from conscalc.consensus import CalculatorInputs, ConsensusEngine
from conscalc.presentation import FIELD_DESCRIPTIONS, detail_rows, headline
from conscalc.research import (
    PAPER_TITLE,
    PAPER_URL,
    CitationView,
    PublicationQuery,
    counts_by_year,
    publications_frame,
)
from conscalc.visualization.plots import gauge_figure

CFG = load_config()
ENGINE = ConsensusEngine.from_config(CFG)

ABSTRACT = (
    "This paper presents a new index of disagreement (or measure of consensus) for "
    "comparison of data collected using Likert items. The index exploits the conditional "
    "distribution of the variance for a given mean: since the range of the variance is a "
    "function of the mean, a group near the end points of the scale has little room to "
    "disagree while a group at the center has the most. The index takes both the mean and "
    "the variance into account, giving a fairer comparison between groups than measures "
    "that depend on the variance alone."
)


def _page_state(key: str, factory):
    """Per-page view state kept in the session under its own key."""
    if key not in st.session_state:
        st.session_state[key] = factory()
    return st.session_state[key]


def _text_field(label: str, key: str, initial: str) -> str:
    """Keyed text input seeded once from the page's view state."""
    if key not in st.session_state:
        st.session_state[key] = initial
    return st.text_input(label, key=key)


def calculator_page():
    settings = CFG.settings
    inputs = _page_state(
        "calculator_inputs",
        lambda: CalculatorInputs.from_defaults(settings.default_mean, settings.default_variance),
    )
    st.header("Consensus Calculator")
    st.write("Enter the Mean (1-5 Likert) and Variance from your dataset to compute the "
             "Index of Disagreement.")

    left, right = st.columns([2, 3])
    with left:
        st.subheader("Input Parameters")
        inputs.mean_text = _text_field("Mean (C)", "calculator_mean", inputs.mean_text)
        inputs.variance_text = _text_field("Variance (D)", "calculator_variance", inputs.variance_text)

    result = inputs.evaluate(ENGINE)
    with left:
        if result is None:
            st.info("Waiting for: " + ", ".join(inputs.pending_fields()))
        elif not result.ok:
            st.error(result.error)

    with right:
        st.subheader("Index of Disagreement (L)")
        st.plotly_chart(gauge_figure(result), use_container_width=True)
        st.markdown(f"## {headline(result, settings.display_precision)}")
        st.caption(FIELD_DESCRIPTIONS["L"])
        if result is not None and result.ok:
            with st.expander("Detailed Steps"):
                cols = st.columns(3)
                for i, row in enumerate(detail_rows(result, settings.detail_precision)):
                    with cols[i % 3]:
                        st.metric(row["label"], row["value"], help=row["help"])
                st.download_button(
                    "Download result JSON",
                    result.to_payload().model_dump_json(indent=2).encode('utf-8'),
                    file_name="consensus_result.json",
                    mime="application/json",
                )


def research_page():
    view = _page_state("citation_view", CitationView)
    st.header("The Foundational Research")
    st.subheader(PAPER_TITLE)
    st.caption("Information Sciences")
    st.markdown("#### Abstract")
    st.write(ABSTRACT)
    st.link_button("Go to Full Paper", PAPER_URL)

    st.markdown("#### Cite This Work")
    formats = view.formats()
    chosen = st.radio("Format", formats, index=formats.index(view.selected), horizontal=True,
                      key="citation_format")
    st.code(view.select(chosen), language=None)


def hub_page():
    query = _page_state("publication_query", PublicationQuery)
    st.header("Research Hub")
    st.write("A curated library of publications on consensus and agreement measurement.")

    search_col, sort_col = st.columns([3, 1])
    with search_col:
        query.search = _text_field("Search by title or author...", "hub_search", query.search)
    with sort_col:
        labels = {"asc": "Year: Oldest", "desc": "Year: Newest"}
        order = st.selectbox("Sort", list(labels), format_func=labels.get,
                             index=list(labels).index(query.sort_order), key="hub_sort")
        query.sort_order = order

    hits = query.apply()
    if hits:
        st.dataframe(publications_frame(hits), use_container_width=True, hide_index=True)
    else:
        st.info("No publications match your search.")

    counts = counts_by_year()
    fig = px.bar(counts, x="year", y="count", title="Publications by Year")
    fig.update_layout(height=320, showlegend=False)
    st.plotly_chart(fig, use_container_width=True)


PAGES = {
    "Calculator": calculator_page,
    "Research": research_page,
    "Research Hub": hub_page,
}


def display_dashboard():
    st.set_page_config(page_title="ConsCalc", page_icon="📈", layout="wide")
    st.title("ConsCalc")
    nav = option_menu(
        menu_title=None,
        options=list(PAGES),
        icons=["calculator", "file-text", "journal-bookmark"],
        orientation="horizontal",
        default_index=0,
    )
    PAGES[nav]()
    st.caption("An index of disagreement for Likert items, after Akiyama et al. (2016).")


if __name__ == '__main__':
    display_dashboard()
