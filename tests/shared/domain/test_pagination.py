from types import SimpleNamespace

from storefront.shared.pagination import fetch_all, paginate


class RecordingQuerySet:
    """Slices a list the way a SQL provider would, honouring only the recorded ordering."""

    def __init__(self, rows, order=(), offset=0, limit=None):
        self.rows = rows
        self.order = list(order)
        self._offset = offset
        self._limit = limit

    def order_by(self, key):
        return RecordingQuerySet(self.rows, [*self.order, key], self._offset, self._limit)

    def offset(self, value):
        return RecordingQuerySet(self.rows, self.order, value, self._limit)

    def limit(self, value):
        return RecordingQuerySet(self.rows, self.order, self._offset, value)

    def all(self):
        rows = sorted(self.rows, key=lambda row: row.id) if "id" in self.order else list(self.rows)
        window = rows[self._offset : self._offset + self._limit]
        return SimpleNamespace(items=window, total=len(rows))


def _rows(count):
    # Stored out of id order, as a heap table may return them
    return [SimpleNamespace(id=f"{n:04d}") for n in reversed(range(count))]


class TestFetchAll:
    def test_reads_across_batch_boundary(self):
        rows = _rows(250)
        fetched = fetch_all(RecordingQuerySet(rows))

        assert len(fetched) == 250
        assert len({row.id for row in fetched}) == 250

    def test_batches_are_ordered_by_id(self):
        fetched = fetch_all(RecordingQuerySet(_rows(150)))
        assert [row.id for row in fetched] == [f"{n:04d}" for n in range(150)]

    def test_exact_multiple_of_batch(self):
        assert len(fetch_all(RecordingQuerySet(_rows(200)))) == 200


class TestPaginate:
    def test_page_breaks_ties_on_id(self):
        page = paginate(RecordingQuerySet(_rows(5)), page=2, limit=2)
        assert [row.id for row in page.items] == ["0002", "0003"]
        assert page.total == 5
        assert page.pages == 3
