from __future__ import annotations

import argparse
from dataclasses import dataclass
import json
import logging

import numpy as np

from graphview import GraphView, GraphViewConfig, Series, SeriesDrawCall


@dataclass
class _CountingRenderer:
    calls: int = 0
    points: int = 0

    def draw_series(self, call: SeriesDrawCall) -> None:
        self.calls += 1
        self.points += int(call.px.size)


def main() -> None:
    parser = argparse.ArgumentParser(prog="graphview")
    sub = parser.add_subparsers(dest="command", required=True)

    sim = sub.add_parser("simulate", help="Run a scripted drag/fling/pinch session and print a JSON summary.")
    sim.add_argument("--points", type=int, default=10000)
    sim.add_argument("--window", type=float, default=200.0, help="Initial viewport size in x units.")
    sim.add_argument("--drag", type=float, default=-300.0, help="Drag distance in pixels (negative scrolls right).")
    sim.add_argument("--fling", type=float, default=-2500.0, help="Release velocity in px/s.")
    sim.add_argument("--pinch", type=float, default=1.25, help="Pinch factor applied after the fling (>1 zooms in).")
    sim.add_argument("--width", type=int, default=1080)
    sim.add_argument("--height", type=int, default=640)
    sim.add_argument("--ticks", type=int, default=120, help="Max fling frames.")
    sim.add_argument("--fps", type=int, default=60)
    sim.add_argument("--seed", type=int, default=7)
    sim.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()

    if args.command == "simulate":
        logging.basicConfig(level=getattr(logging, str(args.log_level).upper(), logging.WARNING))
        print(json.dumps(_simulate(args), indent=2, sort_keys=True))
        return

    raise RuntimeError(f"unsupported command: {args.command}")


def _simulate(args: argparse.Namespace) -> dict[str, object]:
    if args.points <= 1:
        raise ValueError("--points must be > 1")
    if args.fps <= 0:
        raise ValueError("--fps must be > 0")

    rng = np.random.default_rng(args.seed)
    xs = np.arange(args.points, dtype=np.float64)
    ys = 50.0 * np.sin(xs / 25.0) + rng.normal(0.0, 4.0, size=xs.size)

    chart = GraphView(GraphViewConfig.from_env(), scalable=True)
    handle = chart.add_series(Series.from_xy(ys, x=xs, label="signal"))
    chart.viewport.set_size(args.window)

    renderer = _CountingRenderer()
    chart.draw(renderer, args.width, args.height)
    frames = [_frame_summary(chart, "initial")]

    steps = 10
    x_px = args.width / 2.0
    chart.gestures.drag_start(x_px)
    for _ in range(steps):
        x_px += args.drag / steps
        chart.gestures.drag_move(x_px)
    frames.append(_frame_summary(chart, "drag"))

    now = 0.0
    dt = 1.0 / float(args.fps)
    chart.gestures.drag_end(args.fling, now=now)
    ticks = 0
    while ticks < args.ticks:
        now += dt
        ticks += 1
        running = chart.gestures.tick(now)
        chart.draw(renderer, args.width, args.height)
        if not running:
            break
    frames.append(_frame_summary(chart, "fling"))

    chart.gestures.pinch(args.pinch)
    chart.draw(renderer, args.width, args.height)
    frames.append(_frame_summary(chart, "pinch"))

    window = chart.visible_slice(handle)
    return {
        "points": args.points,
        "fling_ticks": ticks,
        "frames": frames,
        "draw_calls": renderer.calls,
        "mapped_points": renderer.points,
        "visible_samples": len(window),
    }


def _frame_summary(chart: GraphView, phase: str) -> dict[str, object]:
    vp = chart.viewport
    return {"phase": phase, "start": round(vp.start, 6), "size": round(vp.size, 6)}


if __name__ == "__main__":
    main()
