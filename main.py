# main.py
from __future__ import annotations

import argparse, json, time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence

from debug import COMPONENTS, Debug, debug
from generator import EnigmaRandom, Generator
from machine import EnigmaMachine
from wheels import REFLECTOR_NAMES, ROTOR_NAMES, make_reflector, make_rotor

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration
# ────────────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class Config:
    """Machine settings plus what the demo should do with them."""

    rotors: List[str] = field(default_factory=lambda: ["III", "II", "I"])
    reflector: str = "B"
    positions: List[int] | None = None   # start positions, all zero if None
    seed: int | None = None              # clock when None
    items: int = 10                      # how many values to shuffle
    draws: int = 0                       # raw generator values to print


def load_config(path: str | Path) -> dict:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    required = {"rotors", "reflector"}
    missing = required - data.keys()
    if missing:
        raise ValueError(f"Missing keys in config: {', '.join(sorted(missing))}")
    return data


def config_from_dict(data: dict) -> Config:
    known = set(Config.__dataclass_fields__)
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown keys in config: {', '.join(sorted(unknown))}")
    return Config(**data)


# ────────────────────────────────────────────────────────────────────────
#  1. Building the machine
# ────────────────────────────────────────────────────────────────────────


def build_machine(cfg: Config) -> EnigmaMachine:
    positions = cfg.positions or [0] * len(cfg.rotors)
    if len(positions) != len(cfg.rotors):
        raise ValueError("positions length mismatch")

    rotors = [make_rotor(name, position=pos) for name, pos in zip(cfg.rotors, positions)]
    return EnigmaMachine(rotors, make_reflector(cfg.reflector))


def seeded_random(machine: EnigmaMachine, seed: int) -> EnigmaRandom:
    """Spin the machine by *seed* steps, then start a stream from it."""
    machine.advance(seed)
    return EnigmaRandom(Generator(machine, seed % machine.base))


def shuffle_items(rng: EnigmaRandom, count: int) -> tuple[list[int], list[int]]:
    before = list(range(1, count + 1))
    after = before.copy()
    rng.shuffle(after)
    return before, after


# ────────────────────────────────────────────────────────────────────────
#  2. CLI
# ────────────────────────────────────────────────────────────────────────


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Shuffle with an Enigma-driven generator")
    p.add_argument("--rotors", nargs="+", metavar="NAME", help=f"Rotor order, first steps fastest ({' '.join(ROTOR_NAMES)})")
    p.add_argument("--reflector", metavar="NAME", help=f"Reflector ({', '.join(REFLECTOR_NAMES)})")
    p.add_argument("--positions", nargs="+", type=int, metavar="N", help="Start position of each rotor (default all 0)")
    p.add_argument("--seed", type=int, help="Steps to spin before drawing (default: clock in ns)")
    p.add_argument("--items", type=int, default=None, help="Shuffle 1..N (default 10)")
    p.add_argument("--draws", type=int, default=None, help="Also print this many raw generator values")
    p.add_argument("--config", metavar="FILE", help="Load settings from JSON; flags override it")
    p.add_argument("--trace", nargs="+", choices=COMPONENTS, metavar="COMPONENT", default=[], help=f"Debug output for: {', '.join(COMPONENTS)}")
    return p.parse_args(argv)


def resolve_config(args: argparse.Namespace) -> Config:
    cfg = config_from_dict(load_config(args.config)) if args.config else Config()
    for name in ("rotors", "reflector", "positions", "seed", "items", "draws"):
        value = getattr(args, name)
        if value is not None:
            setattr(cfg, name, value)
    if cfg.items < 0 or cfg.draws < 0:
        raise ValueError("--items and --draws must not be negative")
    if cfg.seed is not None and cfg.seed < 0:
        raise ValueError("--seed must not be negative")
    return cfg


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)

    if args.trace:
        Debug.configure()
        debug.enable(*args.trace)

    try:
        cfg = resolve_config(args)
        machine = build_machine(cfg)
    except (OSError, ValueError, TypeError) as e:
        raise SystemExit(f"Failed to load configuration: {e}")

    seed = cfg.seed if cfg.seed is not None else time.time_ns()
    rng = seeded_random(machine, seed)

    before, after = shuffle_items(rng, cfg.items)
    print(", ".join(map(str, before)))
    print(", ".join(map(str, after)))

    if cfg.draws:
        values = [rng.generator() for _ in range(cfg.draws)]
        print("Draws:", " ".join(map(str, values)))


if __name__ == "__main__":
    main()
