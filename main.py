#!/usr/bin/env python3
"""Procedural crowd planner: directive text → scene plan → animated instances."""

import argparse
import json
import logging
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from crowdscene.modules.centerpiece import CenterpieceAsset
from crowdscene.modules.motion_evaluator import positions_array
from crowdscene.session import SceneSession, SessionConfig
from crowdscene.shared.constants import DEFAULT_DIRECTIVE

logging.basicConfig(level=logging.INFO, format="%(asctime)s  %(levelname)-8s  %(message)s", datefmt="%H:%M:%S")


def _args() -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Directive-driven procedural crowd",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            '  python main.py "20 red spheres orbit, 5 gold torus"\n'
            '  python main.py "10 toon boxes floating" --mode ar --frames 120 --fps 60\n'
            "  python main.py --plan-json plan.json\n"
        ),
    )
    p.add_argument("directive", nargs="?", default=DEFAULT_DIRECTIVE)
    p.add_argument("--mode", default="web", choices=["web", "ar"])
    p.add_argument("--plan-json", default=None, help="load an external planner's JSON plan instead")
    p.add_argument("--frames", type=int, default=0, help="simulate N frames and print a summary")
    p.add_argument("--fps", type=int, default=60)
    p.add_argument("--model-height", type=float, default=0.0,
                   help="measured centerpiece height (0 = asset unavailable)")
    return p.parse_args()


def main() -> None:
    args = _args()
    session = SceneSession(SessionConfig(mode=args.mode, directive=args.directive))

    if args.plan_json:
        with open(args.plan_json, "r", encoding="utf-8") as f:
            if session.apply_payload(f.read()) is None:
                sys.exit(f"rejected plan payload: {args.plan_json}")

    print(json.dumps(session.plan.to_dict(), indent=2))

    asset = CenterpieceAsset(ready=args.model_height > 0, measured_height=args.model_height)
    placement = session.centerpiece(asset)
    kind = "placeholder" if placement.placeholder else "model"
    print(f"\ncenterpiece ({session.context.name}) → {kind} scale={placement.scale}")

    if args.frames > 0:
        dt = 1.0 / args.fps
        state = session.state
        for n in range(args.frames):
            state = session.tick(elapsed_ms=n * dt * 1000.0, frame_delta=dt)
        print(f"\nafter {args.frames} frames @ {args.fps} fps:")
        for spec, states in zip(state.plan.objects, state.states):
            pos = positions_array(states)
            print(f"  {spec.shape.value:<12} x{spec.count:<4} {spec.motion.value:<6} "
                  f"mean={pos.mean(axis=0).round(3).tolist()}")


if __name__ == "__main__":
    main()
