"""Body model: the ordered sequence of block-level elements of a document."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Sequence, Tuple, Type, Union

from .base import Models
from .bookmark import BookmarkEnd, BookmarkStart
from .paragraph import Paragraph
from .sdt import StructuredDocumentTag
from .section import SectionProperties
from .table import Table

BodyElement = Union[Paragraph, Table, SectionProperties, BookmarkStart, BookmarkEnd,
                    StructuredDocumentTag]

BODY_ELEMENT_TYPES: Tuple[Type[Models], ...] = (
    Paragraph,
    Table,
    SectionProperties,
    BookmarkStart,
    BookmarkEnd,
    StructuredDocumentTag,
)


class Body(Models):
    """
    Exclusive owner of the document's element sequence.

    Only the closed set of ``BodyElement`` kinds is accepted; the estimator
    and the exporter dispatch over exactly these types.
    """

    def __init__(self) -> None:
        super().__init__()
        self.elements: List[BodyElement] = []

    # ------------------------------------------------------------------
    @staticmethod
    def _check(element: Models) -> None:
        if not isinstance(element, BODY_ELEMENT_TYPES):
            allowed = ", ".join(t.__name__ for t in BODY_ELEMENT_TYPES)
            raise TypeError(f"Unsupported body element {type(element).__name__}; allowed: {allowed}")

    def append(self, element: BodyElement) -> BodyElement:
        self._check(element)
        self.elements.append(element)
        self.add_child(element)
        return element

    def extend(self, elements: Iterable[BodyElement]) -> None:
        for element in elements:
            self.append(element)

    def insert(self, index: int, element: BodyElement) -> BodyElement:
        self._check(element)
        self.elements.insert(index, element)
        self.add_child(element)
        return element

    def replace(self, index: int, elements: Sequence[BodyElement]) -> None:
        """Replace the element at ``index`` with ``elements`` (in order)."""
        for element in elements:
            self._check(element)
        removed = self.elements[index]
        self.remove_child(removed)
        self.elements[index:index + 1] = list(elements)
        for element in elements:
            self.add_child(element)

    def remove(self, element: BodyElement) -> None:
        self.elements.remove(element)
        self.remove_child(element)

    def pop(self, index: int = -1) -> BodyElement:
        element = self.elements.pop(index)
        self.remove_child(element)
        return element

    def index(self, element: BodyElement) -> int:
        for position, candidate in enumerate(self.elements):
            if candidate is element:
                return position
        raise ValueError(f"{type(element).__name__} is not in the body")

    def set_elements(self, elements: Sequence[BodyElement]) -> None:
        """Replace the whole sequence."""
        for element in elements:
            self._check(element)
        for element in self.elements:
            self.remove_child(element)
        self.elements = list(elements)
        for element in self.elements:
            self.add_child(element)

    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self) -> Iterator[BodyElement]:
        return iter(self.elements)

    def __getitem__(self, index: int) -> BodyElement:
        return self.elements[index]

    def paragraphs(self) -> List[Paragraph]:
        return [element for element in self.elements if isinstance(element, Paragraph)]

    def tables(self) -> List[Table]:
        return [element for element in self.elements if isinstance(element, Table)]

    def section_records(self) -> List[SectionProperties]:
        """Section records in stream order: paragraph-attached, then the trailing one."""
        records: List[SectionProperties] = []
        for element in self.elements:
            if isinstance(element, Paragraph) and element.section is not None:
                records.append(element.section)
            elif isinstance(element, SectionProperties):
                records.append(element)
        return records

    def get_text(self) -> str:
        return "\n".join(element.get_text() for element in self.elements
                         if isinstance(element, (Paragraph, Table, StructuredDocumentTag)))
