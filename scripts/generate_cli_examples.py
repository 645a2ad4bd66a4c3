from __future__ import annotations

import shutil
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

EXAMPLES_ROOT = Path("examples/cli-options")
BASE_ARGS = ["--resolution", "120", "--max-iterations", "30"]


@dataclass
class Expected:
    path: Path


@dataclass
class Example:
    name: str
    args: list[str]
    expected: list[Expected]
    clean: list[Path] | None = None

    def full_args(self) -> list[str]:
        return [sys.executable, "fractal.py", *self.args]


def _example(name: str, filename: str, *args: str, base: bool = True) -> Example:
    output = EXAMPLES_ROOT / name / filename
    return Example(
        name=name,
        args=[*(BASE_ARGS if base else []), *args, "--output", str(output)],
        expected=[Expected(output)],
        clean=[EXAMPLES_ROOT / name],
    )


EXAMPLES: list[Example] = [
    _example("default", "cubic-roots.png"),
    _example("function", "quartic-exp.png", "--function", "z⁴ + exp(-z)"),
    _example("rational", "poles.png", "--function", "(z² + 1)/(z³ - 1)", "--color-scheme", "viridis"),
    _example("viewport", "window.png", "--x-min", "-1", "--x-max", "1", "--y-min", "-1", "--y-max", "1"),
    _example("aspect", "widescreen.png", "--aspect", "16:9", "--color-scheme", "sunset"),
    _example("explicit-size", "strip.png", "--width", "160", "--height", "48"),
    _example("max-iterations", "shallow.png", "--max-iterations", "12", "--color-scheme", "fire"),
    _example("cyclic-scheme", "banded.png", "--color-scheme", "hsv-16"),
    _example("even-only", "mask.png", "--color-scheme", "hsv-8", "--even-only"),
    _example("preset", "miwok.png", "--preset", "miwok", "--resolution", "160", base=False),
    _example(
        "state",
        "shared.png",
        "--state",
        "f=z%25E2%2581%25B5%2520-%2520z%25C2%25B2&res=120&aspect=1%3A1&iter=30&color=ocean"
        "&x1=-1.5000000000&x2=1.5000000000&y1=-1.5000000000&y2=1.5000000000",
        base=False,
    ),
    _example("format", "cubic.jpg", "--format", "jpg"),
    _example("workers", "parallel.png", "--workers", "2"),
    _example("verbose", "verbose.png", "--verbose", "--print-state"),
]


def _ensure_clean(paths: Iterable[Path]) -> None:
    for path in paths:
        if path.exists():
            if path.is_dir():
                shutil.rmtree(path)
            else:
                path.unlink()


def _prepare(example: Example) -> None:
    clean = example.clean or []
    _ensure_clean(clean)
    for expected in example.expected:
        expected.path.parent.mkdir(parents=True, exist_ok=True)


def _verify(example: Example) -> None:
    for expected in example.expected:
        if not expected.path.is_file():
            raise RuntimeError(f"Expected file {expected.path} was not created")
        if expected.path.stat().st_size == 0:
            raise RuntimeError(f"File {expected.path} is empty")


def main() -> None:
    EXAMPLES_ROOT.mkdir(parents=True, exist_ok=True)
    for example in EXAMPLES:
        print(f"\n[cli-example] {example.name}")
        _prepare(example)
        completed = subprocess.run(example.full_args(), check=True)
        if completed.returncode != 0:
            raise RuntimeError(f"Example {example.name} failed with {completed.returncode}")
        _verify(example)
    print("\nAll CLI examples generated successfully.")


if __name__ == "__main__":
    main()
