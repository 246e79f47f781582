from __future__ import annotations

import contextlib
import io
from pathlib import Path
import tempfile
import unittest
from unittest import mock
import xml.etree.ElementTree as ET

from PIL import Image

from plotxy.cli import build_parser, config_from_args, main
from plotxy.errors import OutputError
from plotxy.pipeline import default_output_path, plot_file, read_input, write_output
from plotxy.config import PlotConfig


SMALL = ["--width", "480", "--height", "360"]


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _run(self, argv: list[str]) -> tuple[int, str, str]:
        out = io.StringIO()
        err = io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            code = main(argv)
        return code, out.getvalue(), err.getvalue()

    def test_writes_png_next_to_input_by_default(self) -> None:
        src = self.tmp / "data.tsv"
        src.write_text("1\t2\n2\t4\n3\t6\n", encoding="utf-8")
        code, stdout, _ = self._run([str(src), *SMALL])
        self.assertEqual(code, 0)
        target = self.tmp / "data.tsv.plotxy.png"
        self.assertEqual(stdout.strip(), str(target))
        with Image.open(target) as image:
            self.assertEqual(image.size, (480, 360))

    def test_svg_output_with_header_and_facet(self) -> None:
        src = self.tmp / "bench.csv"
        src.write_text("size,time,kind\n10,1.5,a\n20,2.5,b\n40,3.0,a\n", encoding="utf-8")
        out = self.tmp / "bench.svg"
        code, _, _ = self._run([str(src), "-d", ",", "-H", "-c", "3", "-o", str(out), *SMALL])
        self.assertEqual(code, 0)
        root = ET.fromstring(out.read_text(encoding="utf-8"))
        circles = root.findall("{http://www.w3.org/2000/svg}circle")
        self.assertEqual(len(circles), 3)
        self.assertEqual(circles[0].attrib["fill"], circles[2].attrib["fill"])
        self.assertNotEqual(circles[0].attrib["fill"], circles[1].attrib["fill"])
        texts = [t.text for t in root.iter("{http://www.w3.org/2000/svg}text")]
        self.assertIn("size", texts)
        self.assertIn("time", texts)
        self.assertEqual(texts[-1], str(out))

    def test_reads_stdin_when_no_input_given(self) -> None:
        out = self.tmp / "stdin.png"
        with mock.patch("sys.stdin", io.StringIO("1\t1\n2\t3\n")):
            code, _, _ = self._run(["-o", str(out), *SMALL])
        self.assertEqual(code, 0)
        self.assertTrue(out.exists())

    def test_missing_input_is_fatal(self) -> None:
        code, _, stderr = self._run([str(self.tmp / "nope.tsv"), *SMALL])
        self.assertEqual(code, 1)
        self.assertIn("plotxy: error: cannot read", stderr)

    def test_no_usable_rows_writes_nothing(self) -> None:
        src = self.tmp / "bad.tsv"
        src.write_text("a\tb\nc\td\n", encoding="utf-8")
        code, _, stderr = self._run([str(src), *SMALL])
        self.assertEqual(code, 1)
        self.assertIn("no usable rows", stderr)
        self.assertEqual(sorted(p.name for p in self.tmp.iterdir()), ["bad.tsv"])

    def test_layout_error_is_fatal(self) -> None:
        src = self.tmp / "data.tsv"
        src.write_text("1\t2\n", encoding="utf-8")
        code, _, stderr = self._run([str(src), "--width", "150", "--height", "100"])
        self.assertEqual(code, 1)
        self.assertIn("no plot area", stderr)

    def test_unwritable_destination_is_output_error(self) -> None:
        src = self.tmp / "data.tsv"
        src.write_text("1\t2\n", encoding="utf-8")
        code, _, stderr = self._run([str(src), "-o", str(self.tmp / "missing" / "x.png"), *SMALL])
        self.assertEqual(code, 1)
        self.assertIn("cannot write", stderr)

    def test_unexpected_failure_is_reported_not_raised(self) -> None:
        src = self.tmp / "data.tsv"
        src.write_text("1\t2\n", encoding="utf-8")
        with mock.patch("plotxy.cli.plot_file", side_effect=RuntimeError("boom")):
            code, stdout, stderr = self._run([str(src), *SMALL])
        self.assertEqual(code, 1)
        self.assertEqual(stdout, "")
        self.assertIn("plotxy: fatal: RuntimeError: boom", stderr)

    def test_invalid_utf8_only_skips_affected_rows(self) -> None:
        src = self.tmp / "data.tsv"
        src.write_bytes(b"1\t2\n2\t\xff4\n3\t6\n")
        out = self.tmp / "data.png"
        with self.assertLogs("plotxy", level="WARNING") as logs:
            code, _, _ = self._run([str(src), "-o", str(out), *SMALL])
        self.assertEqual(code, 0)
        self.assertTrue(out.exists())
        self.assertTrue(any("not valid UTF-8" in line for line in logs.output))
        self.assertTrue(any("skipped 1 malformed row" in line for line in logs.output))

    def test_invalid_option_values_exit_with_usage_error(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                main(["--alpha", "1.5"])
        self.assertEqual(ctx.exception.code, 2)
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                main(["--plot_color", "nothex"])


class ConfigFromArgsTests(unittest.TestCase):
    def test_defaults_match_classic_tool(self) -> None:
        config = config_from_args(build_parser().parse_args([]))
        self.assertEqual(config, PlotConfig())
        self.assertEqual(config.delimiter, "\t")
        self.assertEqual(config.plot_color, (0x1E, 0x88, 0xE5))
        self.assertEqual((config.width, config.height), (2560, 1200))

    def test_svg_inferred_from_outfile_suffix(self) -> None:
        config = config_from_args(build_parser().parse_args(["-o", "plot.SVG"]))
        self.assertEqual(config.output_format, "svg")

    def test_delimiter_aliases(self) -> None:
        self.assertEqual(config_from_args(build_parser().parse_args(["-d", "tab"])).delimiter, "\t")
        self.assertEqual(config_from_args(build_parser().parse_args(["-d", ";;"])).delimiter, ";")


class PipelineTests(unittest.TestCase):
    def test_default_output_paths(self) -> None:
        self.assertEqual(default_output_path(Path("dir/in.tsv")), Path("dir/in.tsv.plotxy.png"))
        self.assertEqual(default_output_path(None, "svg"), Path("STDIN.plotxy.svg"))

    def test_title_defaults_to_output_name(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            src = Path(tmp) / "t.tsv"
            src.write_text("1\t2\n2\t3\n", encoding="utf-8")
            out, plan = plot_file(src, PlotConfig(width=400, height=300, output_format="svg"))
            self.assertEqual(out, Path(f"{src}.plotxy.svg"))
            self.assertEqual(plan.commands[-1].content, str(out))

    def test_read_input_replaces_undecodable_bytes(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            src = Path(tmp) / "data.tsv"
            src.write_bytes(b"1\t2\n\xfe\t3\n")
            with self.assertLogs("plotxy.pipeline", level="WARNING"):
                text = read_input(src)
        self.assertEqual(text, "1\t2\n\ufffd\t3\n")

    def test_write_output_replaces_atomically(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "out.png"
            target.write_bytes(b"old")
            write_output(target, b"new")
            self.assertEqual(target.read_bytes(), b"new")
            self.assertEqual([p.name for p in Path(tmp).iterdir()], ["out.png"])

    def test_write_output_failure_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(OutputError):
                write_output(Path(tmp) / "no" / "such" / "out.png", b"x")


if __name__ == "__main__":
    unittest.main()
