import unittest

from sdinventory.models import AccessEntry, NodeKind, PrincipalType, Role, RoleAggregate
from sdinventory.permissions import aggregate_by_role, combine, display_identifier, node_roles


class TestDisplayIdentifier(unittest.TestCase):
    def test_name_and_email(self) -> None:
        entry = AccessEntry(PrincipalType.USER, Role.READER, email="a@x.com", display_name="Ann")
        self.assertEqual(display_identifier(entry), "Ann:a@x.com")

    def test_email_only(self) -> None:
        entry = AccessEntry(PrincipalType.GROUP, Role.READER, email="team@x.com")
        self.assertEqual(display_identifier(entry), "team@x.com")

    def test_domain_and_anyone(self) -> None:
        self.assertEqual(
            display_identifier(AccessEntry(PrincipalType.DOMAIN, Role.READER, domain="x.com")),
            "@x.com",
        )
        self.assertEqual(
            display_identifier(AccessEntry(PrincipalType.ANYONE, Role.READER)),
            "everyone",
        )

    def test_nothing_identifying(self) -> None:
        self.assertIsNone(display_identifier(AccessEntry(PrincipalType.USER, Role.READER)))


class TestAggregateByRole(unittest.TestCase):
    def test_buckets_and_writer_fills_editors(self) -> None:
        entries = [
            AccessEntry(PrincipalType.USER, Role.ORGANIZER, email="o@x.com"),
            AccessEntry(PrincipalType.USER, Role.FILE_ORGANIZER, email="fo@x.com"),
            AccessEntry(PrincipalType.USER, Role.WRITER, email="w@x.com"),
            AccessEntry(PrincipalType.USER, Role.COMMENTER, email="c@x.com"),
            AccessEntry(PrincipalType.USER, Role.READER, email="r@x.com"),
            AccessEntry(PrincipalType.USER, None, email="unknown-role@x.com"),
        ]

        agg = aggregate_by_role(entries)

        self.assertEqual(agg.organizers, ("o@x.com",))
        self.assertEqual(agg.file_organizers, ("fo@x.com",))
        self.assertEqual(agg.writers, ("w@x.com",))
        self.assertEqual(agg.editors, ("w@x.com",))
        self.assertEqual(agg.commenters, ("c@x.com",))
        self.assertEqual(agg.readers, ("r@x.com",))

    def test_empty(self) -> None:
        self.assertEqual(aggregate_by_role([]), RoleAggregate())


class TestCombine(unittest.TestCase):
    def test_ordered_union(self) -> None:
        self.assertEqual(combine(["a", "b"], ["b", "c"]), ("a", "b", "c"))

    def test_idempotent(self) -> None:
        once = combine(["a", "b"], ["c"])
        self.assertEqual(combine(once, once), once)

    def test_drops_blanks(self) -> None:
        self.assertEqual(combine(["", "a", "  "], ["a", ""]), ("a",))


class TestNodeRoles(unittest.TestCase):
    def setUp(self) -> None:
        self.upper = RoleAggregate(
            organizers=("org",),
            file_organizers=("fo",),
            writers=("w-up",),
            editors=("w-up",),
            commenters=("c-up",),
            readers=("r-up",),
        )
        self.direct = RoleAggregate(
            organizers=("org-direct",),
            file_organizers=(),
            writers=("w-direct",),
            editors=("w-direct",),
            commenters=("c-direct",),
            readers=("r-up", "r-direct"),
        )

    def test_folder_combines_every_tier(self) -> None:
        roles = node_roles(NodeKind.FOLDER, self.upper, self.direct)

        self.assertEqual(roles.organizers, ("org", "org-direct"))
        self.assertEqual(roles.file_organizers, ("fo",))
        self.assertEqual(roles.writers, ("w-up", "w-direct"))
        self.assertIsNone(roles.editors)
        self.assertEqual(roles.commenters, ("c-up", "c-direct"))
        self.assertEqual(roles.readers, ("r-up", "r-direct"))

    def test_file_policy(self) -> None:
        roles = node_roles(NodeKind.FILE, self.upper, self.direct)

        self.assertEqual(roles.organizers, ("org",))
        self.assertEqual(roles.file_organizers, ("fo",))
        self.assertEqual(roles.writers, ("w-up",))
        self.assertEqual(roles.editors, ("w-direct",))
        self.assertEqual(roles.commenters, ("c-up", "c-direct"))
        self.assertEqual(roles.readers, ("r-up", "r-direct"))


if __name__ == "__main__":
    unittest.main()
