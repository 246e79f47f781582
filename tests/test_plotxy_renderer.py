from __future__ import annotations

import unittest

from plotxy.colors import PALETTE, apply_alpha
from plotxy.commands import Column, Line, Point, Rect, Text
from plotxy.config import PlotConfig
from plotxy.errors import DomainError, LayoutError
from plotxy.renderer import build_plot, column_baseline, resolve_axis_descriptions
from plotxy.rows import parse_rows
from plotxy.scales import Domain


def fake_measure(text: str, font: str, size: float) -> tuple[int, int]:
    return (int(len(text) * size * 0.6), int(size))


def small_config(**overrides) -> PlotConfig:
    base = dict(width=640, height=480, title="test plot")
    base.update(overrides)
    return PlotConfig(**base)


def of_type(plan, kind) -> list:
    return [c for c in plan.commands if isinstance(c, kind)]


class RendererScenarioTests(unittest.TestCase):
    def test_default_scatter_of_three_points(self) -> None:
        rows = parse_rows("1\t2\n2\t4\n3\t6\n")
        plan = build_plot(rows.points, small_config(), measure_text=fake_measure)
        self.assertEqual(plan.x_domain, Domain(1.0, 3.0))
        self.assertEqual(plan.y_domain, Domain(2.0, 6.0))
        self.assertEqual((plan.x_kind, plan.y_kind), ("linear", "linear"))
        points = of_type(plan, Point)
        self.assertEqual(len(points), 3)
        expected = apply_alpha((0x1E, 0x88, 0xE5), 0.3)
        self.assertTrue(all(p.color == expected for p in points))
        self.assertEqual(expected[3], 76)
        self.assertEqual((plan.plotted, plan.excluded, plan.clipped), (3, 0, 0))

    def test_points_land_on_plot_corners(self) -> None:
        rows = parse_rows("1\t2\n3\t6\n")
        plan = build_plot(rows.points, small_config(), measure_text=fake_measure)
        plot = plan.layout.plot
        first, last = of_type(plan, Point)
        self.assertEqual((first.x, first.y), (plot.x, plot.bottom - 1))
        self.assertEqual((last.x, last.y), (plot.right - 1, plot.y))

    def test_categorical_facet_shares_colors_per_value(self) -> None:
        rows = parse_rows("1\t2\ta\n2\t3\tb\n3\t4\ta\n", facet_col=3)
        plan = build_plot(rows.points, small_config(color=3), measure_text=fake_measure)
        p1, p2, p3 = of_type(plan, Point)
        self.assertEqual(p1.color, p3.color)
        self.assertNotEqual(p1.color, p2.color)
        self.assertEqual(plan.categories, ("a", "b"))
        self.assertEqual(p1.color, apply_alpha(PALETTE[0], 0.3))

    def test_gradient_facet_uses_configured_endpoints(self) -> None:
        rows = parse_rows("1\t2\t0\n2\t3\t10\n", facet_col=3)
        config = small_config(gradient=3, alpha=1.0)
        plan = build_plot(rows.points, config, measure_text=fake_measure)
        low, high = of_type(plan, Point)
        self.assertEqual(low.color, (255, 255, 0, 255))
        self.assertEqual(high.color, (255, 0, 0, 255))

    def test_log_axis_excludes_non_positive_points(self) -> None:
        rows = parse_rows("1\t0\n2\t1\n3\t10\n4\t100\n")
        with self.assertLogs("plotxy.renderer", level="WARNING"):
            plan = build_plot(rows.points, small_config(logy=True), measure_text=fake_measure)
        self.assertEqual(plan.y_domain, Domain(1.0, 100.0))
        self.assertEqual(plan.excluded, 1)
        self.assertEqual(len(of_type(plan, Point)), 3)

    def test_log_axis_without_positive_values_fails(self) -> None:
        rows = parse_rows("1\t0\n2\t-1\n")
        with self.assertRaises(DomainError):
            build_plot(rows.points, small_config(logy=True), measure_text=fake_measure)

    def test_out_of_range_points_are_clipped_not_dropped(self) -> None:
        rows = parse_rows("-5\t1\n5\t2\n15\t3\n")
        plan = build_plot(rows.points, small_config(x_dim_min=0.0, x_dim_max=10.0), measure_text=fake_measure)
        self.assertEqual(len(rows.points), 3)
        self.assertEqual(plan.x_domain, Domain(0.0, 10.0))
        self.assertEqual(len(of_type(plan, Point)), 1)
        self.assertEqual(plan.clipped, 2)
        plot = plan.layout.plot
        for p in of_type(plan, Point):
            self.assertTrue(plot.contains(p.x, p.y))

    def test_marks_carry_the_plot_area_as_clip(self) -> None:
        rows = parse_rows("1\t2\n3\t6\n")
        for shape, kind in (("circle", Point), ("column", Column)):
            with self.subTest(shape=shape):
                plan = build_plot(rows.points, small_config(shape=shape), measure_text=fake_measure)
                marks = of_type(plan, kind)
                self.assertEqual(len(marks), 2)
                self.assertTrue(all(m.clip == plan.layout.plot for m in marks))

    def test_values_near_float_limit_still_render(self) -> None:
        rows = parse_rows("0\t0\n1\t1.7e308\n-1.7e308\t-1\n")
        plan = build_plot(rows.points, small_config(), measure_text=fake_measure)
        self.assertEqual(plan.y_domain, Domain(-1.0, 1.7e308))
        self.assertEqual(plan.plotted, 3)
        labels = [c.content for c in of_type(plan, Text)]
        self.assertIn("1.700e+308", labels)
        plot = plan.layout.plot
        for p in of_type(plan, Point):
            self.assertTrue(plot.contains(p.x, p.y))

    def test_single_point_is_centered(self) -> None:
        rows = parse_rows("4\t4\n")
        plan = build_plot(rows.points, small_config(), measure_text=fake_measure)
        (point,) = of_type(plan, Point)
        plot = plan.layout.plot
        self.assertAlmostEqual(point.x, plot.x + 0.5 * (plot.width - 1))
        self.assertAlmostEqual(point.y, plot.y + 0.5 * (plot.height - 1))

    def test_bands_too_large_raise_layout_error(self) -> None:
        rows = parse_rows("1\t2\n")
        with self.assertRaises(LayoutError):
            build_plot(rows.points, small_config(width=120, ydesc_area=100), measure_text=fake_measure)


class RendererOrderTests(unittest.TestCase):
    def test_command_order_is_background_axes_data_labels_title(self) -> None:
        rows = parse_rows("1\t2\n2\t4\n3\t6\n")
        plan = build_plot(rows.points, small_config(xdesc="size", ydesc="time"), measure_text=fake_measure)
        commands = list(plan.commands)
        self.assertIsInstance(commands[0], Rect)
        first_data = next(i for i, c in enumerate(commands) if isinstance(c, Point))
        last_data = max(i for i, c in enumerate(commands) if isinstance(c, Point))
        self.assertTrue(all(isinstance(c, (Line, Text)) for c in commands[1:first_data]))
        tail = commands[last_data + 1 :]
        self.assertEqual([c.content for c in tail], ["size", "time", "test plot"])
        self.assertEqual(tail[1].rotate_deg, 90)

    def test_tick_labels_follow_formatter(self) -> None:
        rows = parse_rows("0\t0\n10000\t2000000\n")
        plan = build_plot(rows.points, small_config(xsi=True, ysi=True, title=None), measure_text=fake_measure)
        contents = {c.content for c in of_type(plan, Text)}
        self.assertIn("10K", contents)
        self.assertIn("2M", contents)

    def test_no_title_band_without_title(self) -> None:
        rows = parse_rows("1\t2\n2\t4\n")
        plan = build_plot(rows.points, small_config(title=None, margin=0), measure_text=fake_measure)
        self.assertEqual(plan.layout.title.height, 0)
        self.assertEqual(plan.layout.plot.y, 0)

    def test_same_input_gives_identical_commands(self) -> None:
        text = "1\t2\tb\n2\t4\ta\n3\t6\tb\n"
        config = small_config(color=3)
        first = build_plot(parse_rows(text, facet_col=3).points, config, measure_text=fake_measure)
        second = build_plot(parse_rows(text, facet_col=3).points, config, measure_text=fake_measure)
        self.assertEqual(first.commands, second.commands)


class ColumnShapeTests(unittest.TestCase):
    def test_baseline_is_zero_when_visible(self) -> None:
        self.assertEqual(column_baseline(Domain(-2.0, 4.0), "linear"), 0.0)

    def test_baseline_falls_back_to_domain_minimum(self) -> None:
        self.assertEqual(column_baseline(Domain(2.0, 6.0), "linear"), 2.0)
        self.assertEqual(column_baseline(Domain(1.0, 100.0), "log"), 1.0)

    def test_columns_rise_from_baseline(self) -> None:
        rows = parse_rows("1\t-2\n2\t4\n")
        plan = build_plot(rows.points, small_config(shape="column", size=3), measure_text=fake_measure)
        plot = plan.layout.plot
        neg, pos = of_type(plan, Column)
        zero_y = plot.y + (1.0 - 2.0 / 6.0) * (plot.height - 1)
        self.assertAlmostEqual(neg.y0, zero_y)
        self.assertAlmostEqual(pos.y0, zero_y)
        self.assertEqual(neg.y1, plot.bottom - 1)
        self.assertEqual(pos.y1, plot.y)
        self.assertEqual(pos.width, 6)
        self.assertEqual(of_type(plan, Point), [])

    def test_columns_are_clamped_to_plot_area(self) -> None:
        rows = parse_rows("1\t5\n2\t50\n")
        plan = build_plot(rows.points, small_config(shape="column", y_dim_max=10.0), measure_text=fake_measure)
        plot = plan.layout.plot
        for col in of_type(plan, Column):
            self.assertGreaterEqual(min(col.y0, col.y1), plot.y)
            self.assertLessEqual(max(col.y0, col.y1), plot.bottom - 1)


class AxisDescriptionTests(unittest.TestCase):
    def test_explicit_descriptions_win(self) -> None:
        config = PlotConfig(xdesc="a", ydesc="b")
        self.assertEqual(resolve_axis_descriptions(config, ("h1", "h2")), ("a", "b"))

    def test_header_names_are_defaults(self) -> None:
        config = PlotConfig(x=2, y=3)
        self.assertEqual(resolve_axis_descriptions(config, ("id", "size", "time")), ("size", "time"))
        self.assertEqual(resolve_axis_descriptions(PlotConfig(x=0, y=1), ("time",)), ("index", "time"))

    def test_fallback_descriptions(self) -> None:
        self.assertEqual(resolve_axis_descriptions(PlotConfig(), None), ("X", "Y"))


if __name__ == "__main__":
    unittest.main()
