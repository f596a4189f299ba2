"""Tests for sales aggregation."""
import shutil
import tempfile
import unittest
from pathlib import Path

from salesreport.report.aggregator import ProductAggregate, Report, build
from salesreport.report.groups import GroupRules
from salesreport.report.money import Money
from salesreport.report.records import SalesRecord
from salesreport.utils.exceptions import RecordError

TESTDATA = Path(__file__).parent / "testdata"


class TestReport(unittest.TestCase):
    """Test Report functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.test_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def assertTotalsConsistent(self, report: Report):
        self.assertEqual(
            report.total_units,
            sum(p.units for p in report.products.values())
        )
        self.assertEqual(
            report.total_revenue,
            sum((p.revenue for p in report.products.values()), Money())
        )

    def test_add_records_accumulates_quantity_and_revenue(self):
        """Test that quantity scales the unit price."""
        report = Report()
        report.add_records([
            SalesRecord(quantity=2, item_name="Widget", unit_price=Money.parse("5.00")),
            SalesRecord(quantity=1, item_name="Widget", unit_price=Money.parse("5.00")),
        ])

        self.assertEqual(report.products["Widget"], ProductAggregate(units=3, revenue=Money(1500)))
        self.assertEqual(report.total_units, 3)
        self.assertEqual(report.total_revenue, Money(1500))

    def test_build_squarespace(self):
        """Test aggregation of the Lineitem export."""
        report = build([TESTDATA / "squarespace.csv"])

        self.assertEqual(report.total_units, 8, "wrong units")
        self.assertEqual(report.total_revenue, Money.parse("2,719.70"))
        self.assertEqual(report.products["Go mentoring"].revenue, Money.parse("2,400.00"))
        self.assertEqual(report.products["Code For Your Life"].units, 3)
        self.assertTotalsConsistent(report)

    def test_build_gumroad(self):
        """Test aggregation of the Item export."""
        report = build([TESTDATA / "gumroad.csv"])

        self.assertEqual(report.total_units, 7, "wrong units")
        self.assertEqual(report.total_revenue, Money())
        self.assertTotalsConsistent(report)

    def test_build_with_groups(self):
        """Test that grouped line items share a display name."""
        groups = GroupRules.from_file(TESTDATA / "groups")
        report = build([TESTDATA / "squarespace.csv", TESTDATA / "shopify_legacy.csv"], groups)

        self.assertEqual(
            sorted(report.products),
            [
                "Code For Your Life",
                "For the Love of Go",
                "For the Love of Go: Video/Book Bundle (2023 edition)",
                "Go mentoring",
                "The Power of Go",
            ]
        )
        self.assertEqual(report.products["The Power of Go"].units, 3)
        self.assertEqual(report.products["The Power of Go"].revenue, Money(3 * 4495))
        self.assertEqual(report.products["For the Love of Go"].units, 2)
        self.assertEqual(report.products["For the Love of Go"].revenue, Money(7990))
        self.assertEqual(report.total_units, 11)
        self.assertTotalsConsistent(report)

    def test_unmatched_item_keeps_its_name(self):
        """Test fallback to the raw line item name."""
        groups = GroupRules.from_lines(["Foo | foo"])
        report = Report(groups)
        report.add_record(SalesRecord(1, "bogus product", Money(100)))
        report.add_record(SalesRecord(1, "foo deluxe", Money(100)))

        self.assertEqual(sorted(report.products), ["Foo", "bogus product"])

    def test_products_by_units(self):
        """Test unit order with alphabetical tie-break."""
        report = build([TESTDATA / "squarespace.csv"])
        self.assertEqual(
            report.products_by_units(),
            [
                "Code For Your Life",
                "Go mentoring",
                "For the Love of Go (2023)",
                "For the Love of Go: Video/Book Bundle (2023 edition)",
                "The Power of Go: Tests",
            ]
        )

    def test_products_by_revenue(self):
        """Test revenue order."""
        report = build([TESTDATA / "squarespace.csv"])
        self.assertEqual(
            report.products_by_revenue(),
            [
                "Go mentoring",
                "Code For Your Life",
                "For the Love of Go: Video/Book Bundle (2023 edition)",
                "The Power of Go: Tests",
                "For the Love of Go (2023)",
            ]
        )

    def test_sort_orders_are_permutations(self):
        """Test that both orders cover the same names without mutating the report."""
        report = build([TESTDATA / "squarespace.csv", TESTDATA / "gumroad.csv"])
        before = dict(report.products)

        self.assertEqual(sorted(report.products_by_units()), sorted(report.products_by_revenue()))
        self.assertEqual(report.products, before)

    def test_revenue_tie_break_is_alphabetical(self):
        """Test ties on revenue."""
        report = Report()
        report.add_record(SalesRecord(1, "b", Money(500)))
        report.add_record(SalesRecord(5, "a", Money(100)))
        report.add_record(SalesRecord(1, "c", Money(900)))

        self.assertEqual(report.products_by_revenue(), ["c", "a", "b"])
        self.assertEqual(report.products_by_units(), ["a", "b", "c"])

    def test_bad_file_aborts_build(self):
        """Test that a malformed row fails the whole build."""
        with self.assertRaises(RecordError):
            build([TESTDATA / "squarespace.csv", TESTDATA / "bad_price.csv"])

    def test_read_csv_leaves_report_unchanged_on_error(self):
        """Test that a bad file does not half-update an existing report."""
        report = build([TESTDATA / "gumroad.csv"])

        with self.assertRaises(RecordError):
            report.read_csv(TESTDATA / "bad_price.csv")

        self.assertNotIn("Widget", report.products)
        self.assertEqual(report.total_units, 7)

    def test_merge(self):
        """Test merging partial reports."""
        left = build([TESTDATA / "squarespace.csv"])
        right = build([TESTDATA / "gumroad.csv"])
        combined = build([TESTDATA / "squarespace.csv", TESTDATA / "gumroad.csv"])

        left.merge(right)
        self.assertEqual(left.products, combined.products)
        self.assertEqual(left.total_units, combined.total_units)
        self.assertEqual(left.total_revenue, combined.total_revenue)

    def test_empty_build(self):
        """Test that no files yield an empty report."""
        report = build([])
        self.assertEqual(report.products, {})
        self.assertEqual(report.total_units, 0)
        self.assertEqual(report.products_by_units(), [])


if __name__ == "__main__":
    unittest.main()
