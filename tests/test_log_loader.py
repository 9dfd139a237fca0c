import pathlib
import sys
import tempfile
import unittest

import numpy as np

# Ensure src/ is on path for direct test execution
ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from sigfractal.core.models import FEATURE_FIELDS, FeatureFlags, FeatureVector  # noqa: E402
from sigfractal.dataio.csv_writer import feature_row, write_rows  # noqa: E402
from sigfractal.dataio.log_loader import load_csv, split_header  # noqa: E402


class LogLoaderTest(unittest.TestCase):
    def test_load_csv_without_header(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = pathlib.Path(tmpdir) / "no_header.csv"
            path.write_text("1,2,3\n4,5,6\n", encoding="utf-8")

            data = load_csv(path)

            np.testing.assert_array_equal(data, np.array([[1, 2, 3], [4, 5, 6]]))

    def test_load_csv_with_header(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = pathlib.Path(tmpdir) / "with_header.csv"
            path.write_text("time,value\n0,1.5\n30,2.5\n", encoding="utf-8")

            data = load_csv(path)

            np.testing.assert_array_equal(data, np.array([[0.0, 1.5], [30.0, 2.5]]))

    def test_load_csv_single_column_is_two_dimensional(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = pathlib.Path(tmpdir) / "single.csv"
            path.write_text("value\n1\n2\n3\n", encoding="utf-8")

            data = load_csv(path)

            self.assertEqual(data.shape, (3, 1))
            np.testing.assert_array_equal(data[:, 0], [1.0, 2.0, 3.0])

    def test_split_header_skips_blank_lines(self):
        header, rows = split_header(["", "time, value", "0,1", "", "30,2"])

        self.assertEqual(header, ["time", "value"])
        self.assertEqual(rows, ["0,1", "30,2"])

    def test_load_csv_header_only_is_empty(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = pathlib.Path(tmpdir) / "empty.csv"
            path.write_text("time,value\n", encoding="utf-8")

            self.assertEqual(load_csv(path).size, 0)

    def test_load_csv_rejects_row_with_empty_cell(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = pathlib.Path(tmpdir) / "gap.csv"
            path.write_text("time,value\n0,1\n30,\n60,3\n", encoding="utf-8")

            with self.assertRaisesRegex(ValueError, "30,"):
                load_csv(path)

    def test_split_header_treats_gapped_first_row_as_non_numeric(self):
        header, rows = split_header(["1,,3", "4,5,6"])

        self.assertEqual(header, ["1", "", "3"])
        self.assertEqual(rows, ["4,5,6"])


class CsvWriterTest(unittest.TestCase):
    def test_feature_row_follows_field_order(self):
        vec = FeatureVector(as_of=12.0, n=4, hurst=0.6, flags=FeatureFlags.READY)

        row = feature_row(vec)

        self.assertEqual(len(row), len(FEATURE_FIELDS))
        self.assertEqual(row[FEATURE_FIELDS.index("as_of")], 12.0)
        self.assertEqual(row[FEATURE_FIELDS.index("hurst")], 0.6)
        self.assertEqual(row[FEATURE_FIELDS.index("flags")], 1)

    def test_write_rows_creates_parent_directories(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = pathlib.Path(tmpdir) / "nested" / "out.csv"

            write_rows(path, ["a", "b"], [[1, 2], [3, 4]])

            lines = path.read_text(encoding="utf-8").splitlines()
            self.assertEqual(lines, ["a,b", "1,2", "3,4"])


if __name__ == "__main__":
    unittest.main()
