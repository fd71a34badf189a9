import unittest

from werkzeug.datastructures import MultiDict

from tablesort.sort_state import (
    HeaderColumn,
    compute_preserved_params,
    init_sort_state,
    normalize_direction,
    resolve_direction,
    resolve_order,
)


HEADERS = [
    HeaderColumn(label="Name", field="name"),
    HeaderColumn(label="Date", field="created", default_direction="desc"),
]


class TestResolveOrder(unittest.TestCase):
    def test_default_direction_column_wins_without_request(self) -> None:
        self.assertEqual(resolve_order(HEADERS, None), ("Date", "created"))

    def test_requested_label_selects_column(self) -> None:
        self.assertEqual(resolve_order(HEADERS, "Name"), ("Name", "name"))

    def test_unknown_label_falls_back_to_default_column(self) -> None:
        self.assertEqual(resolve_order(HEADERS, "Bogus"), ("Date", "created"))

    def test_label_match_is_exact(self) -> None:
        self.assertEqual(resolve_order(HEADERS, "name"), ("Date", "created"))

    def test_first_column_without_any_default(self) -> None:
        headers = [
            HeaderColumn(label="Title", field="title"),
            HeaderColumn(label="Author", field="author"),
        ]

        self.assertEqual(resolve_order(headers, None), ("Title", "title"))
        self.assertEqual(resolve_order(headers, "Missing"), ("Title", "title"))

    def test_first_default_column_in_header_order(self) -> None:
        headers = [
            HeaderColumn(label="A", field="a"),
            HeaderColumn(label="B", field="b", default_direction="asc"),
            HeaderColumn(label="C", field="c", default_direction="desc"),
        ]

        self.assertEqual(resolve_order(headers), ("B", "b"))

    def test_plain_string_first_column_yields_none(self) -> None:
        headers = ["Operations", {"data": "Name", "field": "name"}]

        self.assertEqual(resolve_order(headers), (None, None))

    def test_column_without_field_yields_none_field(self) -> None:
        headers = [{"data": "Label only"}]

        self.assertEqual(resolve_order(headers), ("Label only", None))

    def test_empty_header_list(self) -> None:
        self.assertEqual(resolve_order([], "Name"), (None, None))


class TestResolveDirection(unittest.TestCase):
    def test_explicit_sort_is_case_insensitive(self) -> None:
        self.assertEqual(resolve_direction(HEADERS, "DESC"), "desc")
        self.assertEqual(resolve_direction(HEADERS, "Desc"), "desc")
        self.assertEqual(resolve_direction(HEADERS, "desc"), "desc")

    def test_anything_else_is_ascending(self) -> None:
        for value in ("", "asc", "ASC", "foo", "descending", " desc", "up"):
            with self.subTest(value=value):
                self.assertEqual(resolve_direction(HEADERS, value), "asc")

    def test_default_direction_of_selected_column(self) -> None:
        self.assertEqual(resolve_direction(HEADERS, None), "desc")

    def test_selected_column_without_default_is_ascending(self) -> None:
        self.assertEqual(resolve_direction(HEADERS, None, "Name"), "asc")

    def test_empty_header_list_is_ascending(self) -> None:
        self.assertEqual(resolve_direction([], None), "asc")


class TestNormalizeDirection(unittest.TestCase):
    def test_declared_default_is_normalized(self) -> None:
        column = HeaderColumn(label="X", field="x", default_direction="DESC")

        self.assertEqual(column.default_direction, "desc")
        self.assertEqual(HeaderColumn(label="Y", default_direction="sideways").default_direction, "asc")

    def test_none_is_ascending(self) -> None:
        self.assertEqual(normalize_direction(None), "asc")


class TestComputePreservedParams(unittest.TestCase):
    def test_strips_sort_and_order(self) -> None:
        preserved = compute_preserved_params({"sort": "up", "order": "Name", "page": "2"})

        self.assertEqual(preserved.to_dict(), {"page": "2"})

    def test_never_contains_sort_keys(self) -> None:
        inputs = [
            {},
            {"sort": "asc"},
            {"order": "Name"},
            {"q": "x", "sort": "desc", "order": "Date", "page": "3"},
        ]
        for params in inputs:
            with self.subTest(params=params):
                preserved = compute_preserved_params(params)
                self.assertNotIn("sort", preserved)
                self.assertNotIn("order", preserved)

    def test_keeps_key_order_and_repeated_values(self) -> None:
        params = MultiDict([("tag", "a"), ("sort", "asc"), ("page", "2"), ("tag", "b")])

        preserved = compute_preserved_params(params)

        self.assertEqual(list(preserved.items(multi=True)), [("tag", "a"), ("tag", "b"), ("page", "2")])

    def test_does_not_mutate_input(self) -> None:
        params = {"sort": "asc", "page": "1"}

        compute_preserved_params(params)

        self.assertEqual(params, {"sort": "asc", "page": "1"})

    def test_none_input(self) -> None:
        self.assertEqual(len(compute_preserved_params(None)), 0)


class TestInitSortState(unittest.TestCase):
    def test_empty_query(self) -> None:
        state = init_sort_state(HEADERS, {})

        self.assertEqual((state.label, state.field), ("Date", "created"))
        self.assertEqual(state.direction, "desc")

    def test_requested_order_without_sort(self) -> None:
        state = init_sort_state(HEADERS, {"order": "Name"})

        self.assertEqual((state.label, state.field), ("Name", "name"))
        self.assertEqual(state.direction, "asc")

    def test_explicit_sort_wins(self) -> None:
        state = init_sort_state(HEADERS, {"order": "Name", "sort": "DESC"})

        self.assertEqual((state.label, state.field), ("Name", "name"))
        self.assertEqual(state.direction, "desc")

    def test_explicit_sort_overrides_column_default(self) -> None:
        state = init_sort_state(HEADERS, {"sort": "asc"})

        self.assertEqual(state.label, "Date")
        self.assertEqual(state.direction, "asc")

    def test_preserved_params(self) -> None:
        state = init_sort_state(HEADERS, {"sort": "up", "order": "Name", "page": "2"})

        self.assertEqual(state.preserved_params.to_dict(), {"page": "2"})
        self.assertEqual(state.direction, "asc")

    def test_reads_request_style_multidict(self) -> None:
        state = init_sort_state(HEADERS, MultiDict([("order", "Name"), ("sort", "desc")]))

        self.assertEqual(state.label, "Name")
        self.assertEqual(state.direction, "desc")

    def test_empty_headers_is_defined_empty_state(self) -> None:
        state = init_sort_state([], {"order": "Name", "sort": "desc", "page": "4"})

        self.assertIsNone(state.label)
        self.assertIsNone(state.field)
        self.assertEqual(state.direction, "desc")
        self.assertEqual(state.preserved_params.to_dict(), {"page": "4"})

    def test_state_is_immutable(self) -> None:
        state = init_sort_state(HEADERS, {})

        with self.assertRaises(AttributeError):
            state.label = "Name"
        with self.assertRaises(TypeError):
            state.preserved_params["sort"] = "asc"

    def test_missing_params(self) -> None:
        state = init_sort_state(HEADERS)

        self.assertEqual(state.label, "Date")
        self.assertEqual(state.direction, "desc")


if __name__ == "__main__":
    unittest.main()
