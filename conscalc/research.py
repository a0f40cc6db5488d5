"""Citations for the foundational paper and the Research Hub publication list."""
from __future__ import annotations

from dataclasses import dataclass

import pandas as pd

from .core.schemas import Publication

PAPER_TITLE = (
    "A Method for Measuring Consensus Within Groups: "
    "An Index of Disagreement Via Conditional Probability"
)
PAPER_DOI = "10.1016/j.ins.2016.01.052"
PAPER_URL = f"https://doi.org/{PAPER_DOI}"

CITATIONS = {
    "APA": (
        "Akiyama, Y., Nolan, J., Darrah, M., Abdal Rahem, M., & Wang, L. (2016). "
        "A method for measuring consensus within groups: An index of disagreement via "
        "conditional probability. Information Sciences, 345, 116–128. "
        f"{PAPER_URL}"
    ),
    "MLA": (
        "Akiyama, Yoshio, et al. “A Method for Measuring Consensus within Groups: "
        "An Index of Disagreement via Conditional Probability.” Information Sciences, "
        f"vol. 345, 2016, pp. 116–128. Elsevier, {PAPER_URL}"
    ),
    "BibTeX": (
        "@article{Akiyama2016Consensus,\n"
        " title     = {A method for measuring consensus within groups: "
        "An index of disagreement via conditional probability},\n"
        " author    = {Akiyama, Yoshio and Nolan, James and Darrah, Marjorie and "
        "Abdal Rahem, Mushtaq and Wang, Lei},\n"
        " journal   = {Information Sciences},\n"
        " volume    = {345},\n"
        " pages     = {116--128},\n"
        " year      = {2016},\n"
        " publisher = {Elsevier},\n"
        f" doi       = {{{PAPER_DOI}}}\n"
        "}"
    ),
}

PUBLICATIONS = [
    Publication(
        title="A Geometric Approach for Computing a Measure of Consensus for Groups",
        authors="Abdal Rahem, M. & Darrah, M.",
        journal="International Mathematical Forum",
        year=2016,
        doi="10.12988/imf.2016.68115",
    ),
    Publication(
        title="Using a computational approach for generalizing a consensus measure "
              "to Likert scales of any size n",
        authors="Abdal Rahem, M. & Darrah, M.",
        journal="International Journal of Mathematics and Mathematical Sciences",
        year=2018,
        doi="10.1155/2018/5726436",
    ),
    Publication(
        title="A Multidimensional Technique for Measuring Consensus Within Groups "
              "via Conditional Probability",
        authors="Abd AL-Rahem, M.",
        institution="West Virginia University",
        year=2017,
    ),
    Publication(
        title="Consensus-Based Automatic Group Decision-Making Method with Reliability "
              "and Subjectivity Measures Based on Sentiment Analysis",
        authors="Bajaña-Zajía, J. et al.",
        journal="Algorithms",
        year=2025,
        doi="10.3390/a18080477",
    ),
    Publication(
        title="Consensus Opinion Model in Online Social Networks Based on Influential Users",
        authors="MOHAMMADINEJAD, A. et al.",
        journal="IEEE Access",
        year=2019,
        doi="10.1109/ACCESS.2019.2894954",
    ),
    Publication(
        title="Health measurement instruments and their applicability to military "
              "veterans: a systematic review",
        authors="Jomy, J. et al.",
        journal="BMJ Mil Health",
        year=2025,
        doi="10.1136/military-2022-002219",
    ),
]

SORT_ORDERS = ("asc", "desc")


@dataclass
class CitationView:
    """View state of the citation box on the Research page."""
    selected: str = "APA"

    def __post_init__(self) -> None:
        self.select(self.selected)

    @staticmethod
    def formats() -> list[str]:
        return list(CITATIONS)

    def select(self, fmt: str) -> str:
        if fmt not in CITATIONS:
            raise ValueError(f"Unknown citation format: {fmt}")
        self.selected = fmt
        return self.text

    @property
    def text(self) -> str:
        return CITATIONS[self.selected]


@dataclass
class PublicationQuery:
    """Search and sort state of the Research Hub page."""
    search: str = ""
    sort_order: str = "asc"

    def __post_init__(self) -> None:
        if self.sort_order not in SORT_ORDERS:
            raise ValueError(f"Unknown sort order: {self.sort_order}")

    def matches(self, pub: Publication) -> bool:
        needle = self.search.strip().lower()
        if not needle:
            return True
        return needle in pub.title.lower() or needle in pub.authors.lower()

    def apply(self, publications: list[Publication] | None = None) -> list[Publication]:
        pubs = PUBLICATIONS if publications is None else publications
        hits = [p for p in pubs if self.matches(p)]
        return sorted(hits, key=lambda p: p.year, reverse=self.sort_order == "desc")


def publications_frame(publications: list[Publication] | None = None) -> pd.DataFrame:
    pubs = PUBLICATIONS if publications is None else publications
    return pd.DataFrame(
        [p.model_dump() for p in pubs],
        columns=["title", "authors", "journal", "institution", "year", "doi"],
    )


def counts_by_year(publications: list[Publication] | None = None) -> pd.DataFrame:
    """Number of publications per year, oldest first."""
    df = publications_frame(publications)
    if df.empty:
        return pd.DataFrame(columns=["year", "count"])
    counts = df.groupby("year").size().reset_index(name="count")
    return counts.sort_values("year").reset_index(drop=True)
