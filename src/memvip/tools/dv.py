# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/memvip/tools/dv.py

"""Build and run memvip benches via cocotb, pyuvm, and pytest.

Command-line interface:
    dv [--design=mem_ctrl] [--test=test_mem_ctrl] [OPTIONS]

Typical usage:
    # Directed, strict and stress tests against the shipped RTL
    dv

    # Only the stress test, 10k ticks, three seeds
    dv --testcase=MemCtrlStressTest --tick-budget=10000 --seeds 1 2 3

    # Run knobs from a YAML file (RunConfig fields)
    dv --testcase=MemCtrlStressTest --config=runs/stress.yaml

Each seed gets its own test directory with a manifest.json holding the
status and a replay command that reruns exactly that seed.
"""

from __future__ import annotations

import argparse
import hashlib
import json
import logging
import os
import random
import shlex
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final, Sequence

import pytest
from cocotb_tools.runner import get_runner
from tabulate import tabulate

# If executed as a script (path mode), __package__ is empty/None and __spec__ is None.
if (__package__ in (None, "")) and (__spec__ is None):
    print("[dv] ERROR: Please run as 'dv'", file=sys.stderr)
    raise SystemExit(2)

# isort: off
from memvip import utils  # pylint: disable=wrong-import-position
from memvip.mem_ctrl.model import (  # pylint: disable=wrong-import-position
    ConfigError,
    RunConfig,
)

# isort: on

PROJ_DIR: Final[Path] = utils.get_repo_root()
DESIGN_ROOT: Final[Path] = PROJ_DIR / "src" / "memvip"
DEFAULT_OUT_DIR = "out_dv"
DEFAULT_BUILDS_SUBDIR = "builds"
DEFAULT_TESTS_SUBDIR = "tests"
DEFAULT_FRAMEWORK = f"{Path(__file__).resolve()}::test_framework"
DEFAULT_PYTEST_OPTS: tuple[str, ...] = ("-vv", "-s", "-ra", "-x")
DEFAULT_DESIGN = "mem_ctrl"
DEFAULT_TEST = "test_mem_ctrl"

# RunConfig field -> setting name read by RunConfig.from_settings()
RUN_KNOBS: Final[dict[str, str]] = {
    "mode": "MEM_CTRL_MODE",
    "tick_budget": "MEM_CTRL_TICK_BUDGET",
    "seed": "MEM_CTRL_SEED",
    "write_probability": "MEM_CTRL_WRITE_PROB",
    "read_probability": "MEM_CTRL_READ_PROB",
    "idle_probability": "MEM_CTRL_IDLE_PROB",
    "data_min": "MEM_CTRL_DATA_MIN",
    "data_max": "MEM_CTRL_DATA_MAX",
    "pattern": "MEM_CTRL_PATTERN",
    "reset_ticks": "RESET_CYCLES",
    "policy": "MEM_CTRL_POLICY",
    "fail_on_error": "SB_FAIL_ON_ERROR",
}

log = logging.getLogger("memvip.dv")


@dataclass
class _ContextBox:
    value: dict[str, Any] | None = None


@dataclass(frozen=True)
class BuildCfg:  # pylint: disable=too-many-instance-attributes
    """Build configuration."""

    sim: str
    waves: bool
    waves_fmt: str
    design: str
    build_dir: Path
    build_args: list[str]
    build_log_file: Path
    build_force: bool


@dataclass(frozen=True)
class TestCfg:  # pylint: disable=too-many-instance-attributes
    """Test configuration."""

    sim: str
    waves: bool
    design: str
    build_dir: Path
    test: str
    test_module: str
    test_filter: str | None
    seed: int
    test_dir: Path
    test_log_file: Path
    test_args: list[str]
    extra_plusargs: list[str]
    extra_env: dict[str, str]
    results_xml: Path | None


@dataclass
class SeedResult:
    seed: int
    status: str
    expect: str
    duration_s: float
    replay_cmd: str
    test_dir: Path
    notes: list[str] = field(default_factory=list)

    @property
    def as_expected(self) -> bool:
        return self.status == self.expect


# === CLI ===


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments for DV test execution."""

    ap = argparse.ArgumentParser(
        description="Build and run memvip benches via cocotb, pyuvm, and pytest",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    # Global
    ap.add_argument(
        "--cmd",
        choices=["build", "test", "both"],
        default=os.getenv("CMD", "both"),
        help="run only build, only test, or both",
    )
    ap.add_argument(
        "--sim",
        choices=["verilator", "icarus"],
        default=os.getenv("SIM", "verilator"),
        help="simulator (verilator, icarus)",
    )
    ap.add_argument("--outdir", default=DEFAULT_OUT_DIR, help="output directory")
    ap.add_argument(
        "--verbosity",
        choices=["critical", "error", "warning", "info", "debug", "notset"],
        default=os.getenv("VERBOSITY", "info"),
        help="logging level for Python/pyuvm/cocotb",
    )
    ap.add_argument(
        "--waves",
        choices=["0", "1"],
        default=os.getenv("WAVES", "0"),
        help="enable waveforms",
    )
    ap.add_argument(
        "--waves_fmt",
        choices=["fst", "vcd"],
        default=os.getenv("WAVES_FMT", "fst"),
        help="waveform format",
    )

    # Build
    ap.add_argument("--design", default=DEFAULT_DESIGN, help="design to build")
    ap.add_argument("--build-force", action="store_true", help="force a build")
    ap.add_argument(
        "--build-arg",
        dest="build_args",
        action="append",
        default=[],
        help="extra build arg passed verbatim to the simulator (repeatable)",
    )

    # Test
    ap.add_argument(
        "--test",
        default=DEFAULT_TEST,
        help="test module: memvip.<design>.dv.<test>",
    )
    ap.add_argument(
        "--testcase",
        default=None,
        help="regex selecting pyuvm test classes, e.g. MemCtrlStressTest",
    )
    ap.add_argument(
        "--expect",
        choices=["PASS", "FAIL"],
        default="PASS",
        help="expected result for this test",
    )
    ap.add_argument(
        "--seeds",
        nargs="+",
        metavar="SEED",
        help="Explicit seed list (decimal or 0x...). Overrides --nseeds.",
    )
    ap.add_argument(
        "--nseeds", type=int, default=0, help="Generate N seeds if --seeds not given."
    )
    ap.add_argument(
        "--seed-base",
        type=int,
        default=1999,
        help="Base seed for generating additional seeds.",
    )
    ap.add_argument(
        "--seed-out",
        type=Path,
        default=None,
        help="Write the final seed list to a file (one per line).",
    )
    ap.add_argument(
        "--check-en",
        choices=["0", "1"],
        default=os.getenv("CHECK_EN", "1"),
        help="enable checkers",
    )
    ap.add_argument(
        "--coverage-en",
        choices=["0", "1"],
        default=os.getenv("COVERAGE_EN", "1"),
        help="enable coverage collection",
    )

    # Run knobs (RunConfig); unset means the bench resolves its own default
    run = ap.add_argument_group("run configuration")
    run.add_argument("--config", type=Path, default=None, help="RunConfig YAML file")
    run.add_argument("--mode", choices=["directed", "stress"], default=None)
    run.add_argument("--tick-budget", dest="tick_budget", type=int, default=None)
    run.add_argument("--pattern", default=None, help="directed pattern name")
    run.add_argument(
        "--policy", choices=["by_read_request", "strict"], default=None
    )
    run.add_argument("--reset-ticks", dest="reset_ticks", type=int, default=None)

    return ap.parse_args(argv)


def validate_args(args: argparse.Namespace) -> None:
    """Fail fast on missing or inconsistent arguments."""
    if not args.design:
        raise SystemExit("[dv]: error: argument --design required")
    if args.cmd in {"both", "test"} and not args.test:
        raise SystemExit(f"[dv]: error: argument --test required for {args.cmd=}")
    if not (DESIGN_ROOT / args.design / "rtl" / "srclist.f").is_file():
        raise SystemExit(f"[dv]: error: no rtl/srclist.f for design {args.design!r}")


def _strip_seed_args(argv: list[str]) -> list[str]:
    """Drop --nseeds/--seeds (both spellings) so a replay can pin one seed."""
    out: list[str] = []
    i = 0
    while i < len(argv):
        tok = argv[i]
        if tok == "--nseeds":
            i += 2
            continue
        if tok.startswith("--nseeds=") or tok.startswith("--seeds="):
            i += 1
            continue
        if tok == "--seeds":
            i += 1
            while i < len(argv) and not argv[i].startswith("-"):
                i += 1
            continue
        out.append(tok)
        i += 1
    return out


def _pretty(argv: list[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def run_knob_plusargs(args: argparse.Namespace) -> list[str]:
    """Turn --config and the run flags into +NAME=value plusargs.

    The YAML file is validated here as a whole, so a bad file fails before
    anything is built. Explicit flags override the file.
    """
    values: dict[str, Any] = {}
    if args.config is not None:
        try:
            cfg = RunConfig.from_yaml(args.config)
        except ConfigError as e:
            raise SystemExit(f"[dv]: error: {e}") from e
        values.update(cfg.model_dump(mode="json", exclude_unset=True))
    for name in ("mode", "tick_budget", "pattern", "policy", "reset_ticks"):
        v = getattr(args, name, None)
        if v is not None:
            values[name] = v
    out: list[str] = []
    for name, v in values.items():
        if v is None:
            continue
        if isinstance(v, bool):
            v = int(v)
        out.append(f"+{RUN_KNOBS[name]}={v}")
    return out


# === Context & Logging ===

_CTX = _ContextBox()


def _ctx() -> dict[str, Any]:
    """In-process context handed from main() to the pytest entrypoint."""
    if _CTX.value is None:
        raise RuntimeError("[dv] internal context not set")
    return _CTX.value


def _configure_logging(verbosity: str) -> None:
    """Root logger format and level for Python, pyuvm, and cocotb."""
    lvl = getattr(logging, (verbosity or "info").strip().upper(), logging.INFO)

    if os.getenv("COCOTB_REDUCED_LOG_FMT") == "1":
        fmt = "%(levelname).1s %(name)s: %(message)s"
        datefmt = None
    else:
        fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
        datefmt = "%H:%M:%S"

    if not logging.getLogger().handlers:
        logging.basicConfig(level=lvl, format=fmt, datefmt=datefmt)
    logging.getLogger().setLevel(lvl)


# === Seeds ===


def _derive_seeds(args: argparse.Namespace) -> list[int]:
    rng = random.Random(args.seed_base & 0xFFFF_FFFF)
    if args.seeds:
        seeds = [utils.normalize_seed(rng, s) for s in args.seeds]
    elif args.nseeds > 0:
        seeds = [utils.normalize_seed(rng, "random") for _ in range(args.nseeds)]
    else:
        seeds = [42]
    log.info("seeds: %s", seeds)
    return seeds


# === Pytest Args ===


def _pytest_args(selector: str) -> list[str]:
    return [*DEFAULT_PYTEST_OPTS, selector]


def _pytest_cmd_str(selector: str) -> str:
    return "python -m pytest " + " ".join(_pytest_args(selector))


# === Build/Test Config ===


def _waves_fmt(ctx: dict) -> str:
    sim = str(ctx.get("sim", "verilator"))
    waves = bool(ctx.get("waves", False))
    fmt = str(ctx.get("waves_fmt", "fst")).lower()
    fmt = fmt if fmt in {"fst", "vcd"} else "fst"
    # Icarus runner only supports FST traces
    if sim == "icarus" and waves and fmt != "fst":
        log.warning("Icarus only writes FST with the cocotb runner; using fst")
        fmt = "fst"
    return fmt


def _build_dir_for_ctx(ctx: dict) -> Path:
    """<outdir>/builds/<design>.<hash10>, hashed over build-affecting knobs."""
    waves = bool(ctx.get("waves", False))
    fp_obj = {
        "sim": str(ctx.get("sim", "verilator")),
        "waves": waves,
        "waves_fmt": _waves_fmt(ctx) if waves else "",
        "user_build_args": [str(x) for x in ctx.get("user_build_args", [])],
    }
    raw = json.dumps(fp_obj, sort_keys=True, separators=(",", ":")).encode()
    build_hash = hashlib.sha1(raw).hexdigest()[:10]
    design = str(ctx.get("design", DEFAULT_DESIGN))
    outdir = str(ctx.get("outdir", DEFAULT_OUT_DIR))
    return (PROJ_DIR / outdir / DEFAULT_BUILDS_SUBDIR / f"{design}.{build_hash}").resolve()


def _write_build_manifest(cfg: BuildCfg, *, status: str) -> None:
    manifest = {
        "status": status,  # "started" | "built"
        "updated_at": utils.iso_utc(),
        "sim": cfg.sim,
        "waves": cfg.waves,
        "waves_fmt": cfg.waves_fmt,
        "design": cfg.design,
        "build_force": cfg.build_force,
        "build_dir": str(cfg.build_dir),
        "fingerprint": cfg.build_dir.name,
        "build_args": cfg.build_args,
    }
    cfg.build_dir.mkdir(parents=True, exist_ok=True)
    (cfg.build_dir / "manifest.json").write_text(json.dumps(manifest, indent=2))


def _make_build_cfg(ctx: dict) -> BuildCfg:
    sim = str(ctx.get("sim", "verilator"))
    waves = bool(ctx.get("waves", False))
    waves_fmt = _waves_fmt(ctx)
    design = str(ctx.get("design", DEFAULT_DESIGN))

    build_dir = _build_dir_for_ctx(ctx)
    build_dir.mkdir(parents=True, exist_ok=True)

    build_args: list[str] = []
    if sim == "verilator":
        build_args += ["--timing", "--autoflush"]
        if waves:
            build_args.append("--trace-fst" if waves_fmt == "fst" else "--trace")
    else:
        build_args.append("-g2012")

    srclist_file = DESIGN_ROOT / design / "rtl" / "srclist.f"
    abs_srclist = utils.absolutize_srclist(srclist_file, PROJ_DIR, build_dir)
    build_args += ["-f", str(abs_srclist)]

    # User-supplied build args go last so they can override defaults.
    build_args += [str(x) for x in ctx.get("user_build_args", [])]

    return BuildCfg(
        sim=sim,
        waves=waves,
        waves_fmt=waves_fmt,
        design=design,
        build_dir=build_dir,
        build_args=build_args,
        build_log_file=build_dir / "build.log",
        build_force=bool(ctx.get("build_force", False)),
    )


def _make_test_cfg(ctx: dict) -> TestCfg:  # pylint: disable=too-many-locals
    sim = str(ctx.get("sim", "verilator"))
    outdir = str(ctx.get("outdir", DEFAULT_OUT_DIR))
    waves = bool(ctx.get("waves", False))
    waves_fmt = _waves_fmt(ctx)
    design = str(ctx.get("design", DEFAULT_DESIGN))
    test = str(ctx.get("test", DEFAULT_TEST))

    build_dir = _build_dir_for_ctx(ctx)
    build_dir.mkdir(parents=True, exist_ok=True)

    seed = int(ctx.get("seed", 42))

    tests_root = Path(
        ctx.get("tests_root", f"{outdir}/{DEFAULT_TESTS_SUBDIR}")
    ).resolve()
    test_tag = ctx.get("test_tag") or f"{build_dir.name}.{test}.{seed}"
    test_dir = (tests_root / test_tag).resolve()
    test_dir.mkdir(parents=True, exist_ok=True)

    wave_file = test_dir / f"waves.{waves_fmt}"

    test_args: list[str] = []
    if sim == "verilator" and waves:
        test_args = ["--trace-file", str(wave_file.resolve())]

    # Bench knobs -> plusargs
    extra_plusargs: list[str] = []
    if "check_en" in ctx:
        extra_plusargs.append(f"+CHECK_EN={int(bool(ctx['check_en']))}")
    if "coverage_en" in ctx:
        extra_plusargs.append(f"+COVERAGE_EN={int(bool(ctx['coverage_en']))}")
    extra_plusargs += list(ctx.get("run_plusargs", []))

    # Icarus wants the dump path as a plusarg after the .vvp file
    if sim == "icarus" and waves:
        extra_plusargs.append(f"+dumpfile_path={wave_file.resolve()}")

    # Simulator-side env (no global env writes)
    extra_env: dict[str, str] = {
        "COCOTB_RANDOM_SEED": str(seed),
        "COCOTB_LOG_LEVEL": str(ctx.get("verbosity", "info")).upper(),
    }
    if extra_plusargs:
        extra_env["COCOTB_PLUSARGS"] = " ".join(extra_plusargs)
    cov_yaml = test_dir / "coverage.yaml"
    if ctx.get("coverage_en", True):
        extra_env["COV_YAML"] = str(cov_yaml)

    results_xml: Path | None = None
    if os.getenv("PYTEST_CURRENT_TEST") is None:
        results_xml = test_dir / "results.xml"

    return TestCfg(
        sim=sim,
        waves=waves,
        design=design,
        build_dir=build_dir,
        test=test,
        test_module=f"memvip.{design}.dv.{test}",
        test_filter=ctx.get("testcase"),
        seed=seed,
        test_dir=test_dir,
        test_log_file=test_dir / "test.log",
        test_args=test_args,
        extra_plusargs=extra_plusargs,
        extra_env=extra_env,
        results_xml=results_xml,
    )


# === Actions ===


def run_build(cfg: BuildCfg) -> None:
    """Compile the design once per fingerprint."""
    log.info("building %s in %s", cfg.design, cfg.build_dir)
    runner = get_runner(cfg.sim)
    _write_build_manifest(cfg, status="started")
    runner.build(
        hdl_toplevel=cfg.design,
        timescale=("1ns", "1ps"),
        waves=cfg.waves,
        build_dir=cfg.build_dir,
        build_args=cfg.build_args,
        log_file=str(cfg.build_log_file),
        always=cfg.build_force,
    )
    _write_build_manifest(cfg, status="built")


def run_test(cfg: TestCfg) -> None:
    log.info("running %s seed=%d in %s", cfg.test_module, cfg.seed, cfg.test_dir)
    runner = get_runner(cfg.sim)
    runner.test(
        hdl_toplevel_lang="verilog",
        hdl_toplevel=cfg.design,
        waves=cfg.waves,
        build_dir=str(cfg.build_dir),
        test_module=cfg.test_module,
        test_filter=cfg.test_filter,
        log_file=str(cfg.test_log_file),
        test_args=cfg.test_args,
        plusargs=cfg.extra_plusargs,
        extra_env=cfg.extra_env,
        results_xml=str(cfg.results_xml) if cfg.results_xml else None,
    )


# === Pytest Entrypoint ===


def test_framework() -> None:
    """Pytest entrypoint: build and/or test according to the in-process context."""
    ctx = _ctx()  # raises if not set

    cmd = str(ctx.get("cmd", "both")).lower()
    do_build = cmd in {"both", "build"}
    do_test = cmd in {"both", "test"} and bool(ctx.get("test", DEFAULT_TEST))

    bcfg = _make_build_cfg(ctx)

    if do_build:
        run_build(bcfg)
    elif not bcfg.build_dir.exists():
        raise RuntimeError(
            f"[dv] build dir missing: {bcfg.build_dir}. Run with --cmd build first."
        )

    if do_test:
        run_test(_make_test_cfg(ctx))


# === Multi-seed Orchestration ===


def _run_one_pytest(seed: int, test_dir: Path, ctx_base: dict) -> SeedResult:
    """Run the pytest entrypoint for one seed and write its manifest."""

    test_dir.mkdir(parents=True, exist_ok=True)

    ctx = dict(ctx_base)
    ctx["seed"] = seed
    ctx["tests_root"] = str(test_dir.parent)
    ctx["test_tag"] = test_dir.name

    _CTX.value = ctx

    # pytest re-imports this file by path; point it at the live module
    sys.modules.setdefault("memvip.tools.dv", sys.modules[__name__])

    t0 = time.time()
    framework_rc = pytest.main(_pytest_args(DEFAULT_FRAMEWORK))
    t1 = time.time()

    base_argv = list(ctx.get("orig_argv", []))
    replay_argv = _strip_seed_args(base_argv) + ["--seeds", str(seed)]
    res = SeedResult(
        seed=seed,
        status="PASS" if framework_rc == 0 else "FAIL",
        expect=str(ctx.get("expect", "PASS")).strip().upper(),
        duration_s=round(t1 - t0, 3),
        replay_cmd=_pretty(["python", "-m", "memvip.tools.dv", *replay_argv]),
        test_dir=test_dir,
    )
    if ctx.get("coverage_en", True) and (test_dir / "coverage.yaml").is_file():
        res.notes.append(f"coverage: {test_dir / 'coverage.yaml'}")

    manifest = {
        "status": res.status,
        "expect": res.expect,
        "duration_s": res.duration_s,
        "cmd": _pytest_cmd_str(DEFAULT_FRAMEWORK),
        "replay_cmd": res.replay_cmd,
        "build_dir": str(_build_dir_for_ctx(ctx)),
        "test_dir": str(test_dir),
        "notes": res.notes,
        "ctx": {k: v for k, v in ctx.items() if k != "orig_argv"},
    }
    (test_dir / "manifest.json").write_text(
        json.dumps(manifest, indent=2, default=str), encoding="utf-8"
    )
    return res


def _summary_table(results: list[SeedResult]) -> str:
    rows = []
    for res in results:
        label = f"{res.status} ({'EXPECTED' if res.as_expected else 'UNEXPECTED'})"
        paint = utils.green if res.as_expected else utils.red
        rows.append([res.seed, paint(label), f"{res.duration_s:.2f}", res.replay_cmd])
    return tabulate(
        rows, headers=["Seed", "Result", "Time (s)", "Replay"], tablefmt="github"
    )


# === Main ===


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the ``dv`` console script.

    Returns 0 when every seed's result matched --expect.
    """
    orig_argv = list(sys.argv[1:] if argv is None else argv)
    args = parse_args(argv)
    validate_args(args)
    _configure_logging(str(args.verbosity))

    tests_root = Path(f"{args.outdir}/{DEFAULT_TESTS_SUBDIR}").resolve()

    # Shared context for all seeds (no env; carried in-process)
    ctx_base: dict = {
        "orig_argv": orig_argv,
        "cmd": args.cmd,
        "sim": args.sim,
        "outdir": args.outdir,
        "verbosity": args.verbosity,
        "waves": (args.waves == "1"),
        "waves_fmt": args.waves_fmt,
        "design": args.design,
        "build_force": bool(args.build_force),
        "user_build_args": list(args.build_args or []),
        "test": args.test,
        "testcase": args.testcase,
        "expect": args.expect,
        "check_en": (args.check_en == "1"),
        "coverage_en": (args.coverage_en == "1"),
        "run_plusargs": run_knob_plusargs(args),
    }

    build_dir_name = _build_dir_for_ctx(ctx_base).name

    # Even for cmd=build we go through pytest once (framework will skip test)
    if args.cmd == "build":
        res = _run_one_pytest(0, tests_root / f"{build_dir_name}.build_only", ctx_base)
        return 0 if res.status == "PASS" else 1

    results: list[SeedResult] = []
    seeds = _derive_seeds(args)
    for idx, seed in enumerate(seeds):
        per_ctx = dict(ctx_base)
        # Build once (first seed) when cmd=both; later seeds reuse it
        if ctx_base["cmd"] == "both" and idx > 0:
            per_ctx["cmd"] = "test"
        tag = f"{build_dir_name}.{args.test}.{seed}"
        results.append(_run_one_pytest(seed, tests_root / tag, per_ctx))

    if args.seed_out:
        with Path(args.seed_out).open("w", encoding="utf-8", newline="\n") as f:
            for s in seeds:
                f.write(f"{s}\n")

    print()
    print(_summary_table(results))
    return 0 if all(r.as_expected for r in results) else 1


if __name__ == "__main__":
    raise SystemExit(main())
