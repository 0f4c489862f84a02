import unittest
from dataclasses import FrozenInstanceError

from commit_info.history.commit_model import UNKNOWN, CommitId, CommitSummary


SHA1 = "0123456789abcdef0123456789abcdef01234567"
SHA256 = "ab" * 32


class TestCommitId(unittest.TestCase):
    def test_from_hex_round_trips_to_str(self) -> None:
        cid = CommitId.from_hex(SHA1)
        self.assertEqual(str(cid), SHA1)
        self.assertEqual(cid.get_oid(), bytes.fromhex(SHA1))
        self.assertEqual(cid.short(), "0123456")

    def test_from_hex_accepts_uppercase_and_sha256(self) -> None:
        self.assertEqual(str(CommitId.from_hex(SHA1.upper())), SHA1)
        self.assertEqual(len(CommitId.from_hex(SHA256).get_oid()), 32)

    def test_from_hex_rejects_invalid_values(self) -> None:
        for value in ["", "abc123", SHA1[:-1], "z" * 40, SHA1 + "0"]:
            with self.subTest(value=value):
                with self.assertRaises(ValueError):
                    CommitId.from_hex(value)

    def test_equality_and_hash_are_structural(self) -> None:
        a = CommitId(bytes.fromhex(SHA1))
        b = CommitId.from_hex(SHA1)
        self.assertEqual(a, b)
        self.assertEqual(hash(a), hash(b))
        self.assertEqual(len({a, b}), 1)
        self.assertNotEqual(a, CommitId.from_hex("f" * 40))

    def test_ids_are_not_ordered(self) -> None:
        a = CommitId.from_hex(SHA1)
        b = CommitId.from_hex("f" * 40)
        with self.assertRaises(TypeError):
            a < b  # noqa: B015

    def test_id_is_immutable(self) -> None:
        cid = CommitId.from_hex(SHA1)
        with self.assertRaises(FrozenInstanceError):
            cid._oid = b"x"  # type: ignore[misc]

    def test_repr_shows_hex(self) -> None:
        self.assertIn(SHA1, repr(CommitId.from_hex(SHA1)))


class TestCommitSummary(unittest.TestCase):
    def test_summary_fields(self) -> None:
        cid = CommitId.from_hex(SHA1)
        summary = CommitSummary(message="fix", time=-5, author=UNKNOWN, id=cid)
        self.assertEqual(summary.message, "fix")
        self.assertEqual(summary.time, -5)
        self.assertEqual(summary.author, "<unknown>")
        self.assertIs(summary.id, cid)


if __name__ == "__main__":
    unittest.main()
