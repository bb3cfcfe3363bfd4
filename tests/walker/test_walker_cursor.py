import unittest

from sdinventory.errors import NetworkError
from sdinventory.walker import PaginationCursor


class PagedSource:
    def __init__(self, pages) -> None:
        self.pages = pages
        self.requested = []

    def __call__(self, token):
        self.requested.append(token)
        return self.pages[token]


class TestPaginationCursor(unittest.TestCase):
    def setUp(self) -> None:
        self.source = PagedSource(
            {
                None: (["a", "b"], "t1"),
                "t1": (["c", "d"], "t2"),
                "t2": (["e"], None),
            }
        )

    def test_iterates_all_pages_with_producing_token(self) -> None:
        cursor = PaginationCursor(self.source)

        pages = list(cursor)

        self.assertEqual([p.token for p in pages], [None, "t1", "t2"])
        self.assertEqual([list(p.items) for p in pages], [["a", "b"], ["c", "d"], ["e"]])
        self.assertIsNone(pages[-1].next_token)

    def test_starts_from_token(self) -> None:
        pages = list(PaginationCursor(self.source, start_token="t1"))

        self.assertEqual(self.source.requested, ["t1", "t2"])
        self.assertEqual(pages[0].token, "t1")

    def test_is_lazy(self) -> None:
        cursor = PaginationCursor(self.source)

        for page in cursor:
            if page.token is None:
                break

        self.assertEqual(self.source.requested, [None])

    def test_empty_next_token_ends_iteration(self) -> None:
        source = PagedSource({None: ([], "")})

        pages = list(PaginationCursor(source))

        self.assertEqual(len(pages), 1)
        self.assertIsNone(pages[0].next_token)

    def test_fetch_error_propagates(self) -> None:
        def failing(token):
            raise NetworkError("connection reset")

        with self.assertRaises(NetworkError):
            list(PaginationCursor(failing))


if __name__ == "__main__":
    unittest.main()
