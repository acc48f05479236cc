from __future__ import annotations

import asyncio
from typing import Dict, List, Optional, Tuple

import pytest

from ldexplorer.data_processing import DataSource
from ldexplorer.graph import Graph
from ldexplorer.models import Term, Triple
from ldexplorer.sink import DataSet


def make_triple(
    subject: str,
    subject_label: str,
    predicate: str,
    predicate_label: str,
    obj: str,
    obj_label: str,
) -> Triple:
    return Triple(
        subject=Term(subject, subject_label),
        predicate=Term(predicate, predicate_label),
        object=Term(obj, obj_label),
    )


class FakeDataSource(DataSource):
    """Serves canned triples and records every call."""

    def __init__(
        self,
        properties: Optional[Dict[str, List[Triple]]] = None,
        data: Optional[Dict[Tuple[str, str], List[Triple]]] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self.properties = properties or {}
        self.data = data or {}
        self.error = error
        self.calls: List[tuple] = []

    async def fetch_properties(self, uri: str) -> List[Triple]:
        self.calls.append(("properties", uri))
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        return list(self.properties.get(uri, []))

    async def fetch_data(self, uri: str, predicate: str) -> List[Triple]:
        self.calls.append(("data", uri, predicate))
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        return list(self.data.get((uri, predicate), []))


class RecordingDataSet(DataSet):
    def __init__(self) -> None:
        super().__init__()
        self.added: list = []
        self.removed: list = []

    def add(self, item):
        ident = super().add(item)
        self.added.append(ident)
        return ident

    def remove(self, item_or_key):
        removed = super().remove(item_or_key)
        if removed is not None:
            self.removed.append(removed.key)
        return removed


@pytest.fixture()
def alice_source() -> FakeDataSource:
    return FakeDataSource(
        properties={
            "ex:A": [make_triple("ex:A", "Alice", "ex:knows", "knows", "ex:B", "Bob")],
        },
        data={
            ("ex:A", "ex:knows"): [
                make_triple("ex:A", "Alice", "ex:knows", "knows", "ex:C", "Carol"),
                make_triple("ex:A", "Alice", "ex:knows", "knows", "ex:D", "Dave"),
            ],
        },
    )


@pytest.fixture()
def graph(alice_source: FakeDataSource) -> Graph:
    return Graph(alice_source)
