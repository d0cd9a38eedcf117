# experiments.py

"""
Huffman coder experiments: tie-break policies across data distributions

Runs repeated experiments to measure how the static Huffman pipeline behaves
on different synthetic data, and whether the tie-break policy ("fifo" vs
"symbol") changes anything besides the exact code assignment

Outputs (in --outdir):
  - metrics.csv     (raw row per run per configuration)
  - summary.csv     (grouped mean/stdev)
  - *.png           (charts)

How to run:
  python experiments.py --outdir results --runs 5
  python experiments.py --outdir results --runs 3 --exp1_size_kb 256 --exp2_max_kb 2048
  python experiments.py --outdir results --runs 5 --exp1_generators uniform256,zipf128,english_like

Notes:
  Both pipelines must give the same compressed size for a given input; only
  timings and the code assignment may differ.
"""

from __future__ import annotations

import argparse
import csv
import logging
import random
import statistics
import time
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt

import bitpack
import huffman as huff

logger = logging.getLogger(__name__)

PIPELINES = (huff.TIE_BREAK_FIFO, huff.TIE_BREAK_SYMBOL)


# Utilities

def now_ns() -> int:
    return time.perf_counter_ns()

def ns_to_ms(ns: int) -> float:
    return ns / 1_000_000.0

def safe_mkdir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)


# Synthetic dataset generators

def _sample(rng: random.Random, symbols: Sequence[int], weights: Sequence[float], size: int) -> bytes:
    return bytes(rng.choices(symbols, weights=weights, k=size))

def gen_uniform(size: int, alphabet: int = 256, seed: int = 0) -> bytes:
    rng = random.Random(seed)
    return bytes(rng.randrange(0, alphabet) for _ in range(size))

def gen_repetitive(size: int, dominant: int = ord('A'), dom_frac: float = 0.90, seed: int = 0) -> bytes:
    rng = random.Random(seed)
    others = [i for i in range(256) if i != dominant]
    weights = [dom_frac] + [(1.0 - dom_frac) / len(others)] * len(others)
    return _sample(rng, [dominant] + others, weights, size)

def gen_zipf_like(size: int, alphabet: int = 128, s: float = 1.2, seed: int = 0) -> bytes:
    rng = random.Random(seed)
    weights = [1.0 / ((i + 1) ** s) for i in range(alphabet)]
    return _sample(rng, list(range(alphabet)), weights, size)

def gen_english_like(size: int, seed: int = 0) -> bytes:
    rng = random.Random(seed)
    chars = " etaoinshrdlcumwfgypbvkjxqETAOINSHRDLCUMWFGYPBVKJXQ\n"
    weights = []
    for ch in chars:
        if ch == ' ':
            weights.append(13.0)
        elif ch == '\n':
            weights.append(1.5)
        elif ch.lower() in "etaoinshrdlu":
            weights.append(6.0)
        elif ch.lower() in "cmfwgypbvk":
            weights.append(2.5)
        else:
            weights.append(1.2)
    return _sample(rng, [ord(ch) for ch in chars], weights, size)

def gen_single_symbol(size: int, seed: int = 0) -> bytes:
    return bytes([ord('A')]) * size

GENERATOR_REGISTRY: Dict[str, Callable[[int, int], bytes]] = {
    "uniform256": lambda size, seed: gen_uniform(size, alphabet=256, seed=seed),
    "uniform128": lambda size, seed: gen_uniform(size, alphabet=128, seed=seed),
    "zipf128": lambda size, seed: gen_zipf_like(size, alphabet=128, s=1.2, seed=seed),
    "zipf64": lambda size, seed: gen_zipf_like(size, alphabet=64, s=1.2, seed=seed),
    "repetitive90": lambda size, seed: gen_repetitive(size, dominant=ord('A'), dom_frac=0.90, seed=seed),
    "repetitive99": lambda size, seed: gen_repetitive(size, dominant=ord('A'), dom_frac=0.99, seed=seed),
    "english_like": lambda size, seed: gen_english_like(size, seed=seed),
    "single_symbol": lambda size, seed: gen_single_symbol(size, seed=seed),
}

def generate_dataset(name: str, size_bytes: int, seed: int) -> Tuple[str, bytes]:
    fn = GENERATOR_REGISTRY.get(name)
    if fn is None:
        raise ValueError(f"unknown dataset generator {name!r}; choose from {sorted(GENERATOR_REGISTRY)}")
    return name, fn(size_bytes, seed)


# Experiment runner

@dataclass
class MetricRow:
    exp_name: str
    dataset_name: str
    file_size_bytes: int
    run_id: int
    pipeline: str  # tie-break policy
    unique_symbols: int

    build_huffman_ms: float
    encode_ms: float
    decode_ms: float
    total_ms: float

    encoded_bits: int
    compressed_bytes: int
    pad_bits: int
    compression_ratio: float

    avg_code_length: float
    entropy_bits: float
    max_code_length: int
    correctness_ok: int  # 1 or 0


def run_one(data: bytes, pipeline: str) -> MetricRow:
    ft = huff.build_frequency_table(data)

    # Huffman build
    t0 = now_ns()
    root = huff.build_huffman_tree(ft, tie_break=pipeline)
    code_map = huff.generate_huffman_codes(root)
    t1 = now_ns()
    build_huffman_ms = ns_to_ms(t1 - t0)

    # encode
    t2 = now_ns()
    bits = huff.huffman_encode(data, code_map)
    packed, pad_bits = bitpack.pack_bits(bits)
    t3 = now_ns()
    encode_ms = ns_to_ms(t3 - t2)

    # decode
    t4 = now_ns()
    decoded = bytes(bitpack.decompress(packed, pad_bits, root))
    t5 = now_ns()
    decode_ms = ns_to_ms(t5 - t4)

    correctness_ok = 1 if decoded == data else 0
    if not correctness_ok:
        logger.error("round trip mismatch for pipeline %s (%d bytes)", pipeline, len(data))

    return MetricRow(
        exp_name="",
        dataset_name="",
        file_size_bytes=len(data),
        run_id=0,
        pipeline=pipeline,
        unique_symbols=len(ft),
        build_huffman_ms=build_huffman_ms,
        encode_ms=encode_ms,
        decode_ms=decode_ms,
        total_ms=build_huffman_ms + encode_ms + decode_ms,
        encoded_bits=len(bits),
        compressed_bytes=len(packed),
        pad_bits=pad_bits,
        compression_ratio=len(packed) / max(1, len(data)),
        avg_code_length=huff.average_code_length(code_map, ft),
        entropy_bits=huff.shannon_entropy(ft),
        max_code_length=max(len(code) for code in code_map.values()),
        correctness_ok=correctness_ok,
    )


def run_configuration(exp_name: str, dataset_name: str, data: bytes, run_id: int) -> List[MetricRow]:
    rows = []
    for pipeline in PIPELINES:
        row = run_one(data, pipeline)
        row.exp_name = exp_name
        row.dataset_name = dataset_name
        row.run_id = run_id
        rows.append(row)
    return rows


def write_csv(path: Path, rows: List[MetricRow]) -> None:
    field_names = [f.name for f in fields(MetricRow)]
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=field_names)
        w.writeheader()
        for r in rows:
            w.writerow({k: getattr(r, k) for k in field_names})


SUMMARY_METRICS = (
    "compression_ratio",
    "avg_code_length",
    "entropy_bits",
    "build_huffman_ms",
    "encode_ms",
    "decode_ms",
    "total_ms",
)

def mean_stdev(vals: List[float]) -> Tuple[float, float]:
    if len(vals) == 1:
        return vals[0], 0.0
    return statistics.mean(vals), statistics.stdev(vals)

def group_summary(rows: List[MetricRow], out_path: Path) -> None:
    """
    Group by exp_name, dataset_name, file_size_bytes, pipeline and compute mean/stdev
    """
    key_to: Dict[Tuple[str, str, int, str], List[MetricRow]] = {}
    for r in rows:
        key = (r.exp_name, r.dataset_name, r.file_size_bytes, r.pipeline)
        key_to.setdefault(key, []).append(r)

    summary_fields = ["exp_name", "dataset_name", "file_size_bytes", "pipeline", "n_runs"]
    for metric in SUMMARY_METRICS:
        summary_fields += [f"{metric}_mean", f"{metric}_stdev"]
    summary_fields.append("correctness_ok_rate")

    with out_path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=summary_fields)
        w.writeheader()
        for key, items in sorted(key_to.items()):
            exp_name, dataset_name, size_b, pipeline = key
            out = {
                "exp_name": exp_name,
                "dataset_name": dataset_name,
                "file_size_bytes": size_b,
                "pipeline": pipeline,
                "n_runs": len(items),
                "correctness_ok_rate": sum(x.correctness_ok for x in items) / len(items),
            }
            for metric in SUMMARY_METRICS:
                m, s = mean_stdev([getattr(x, metric) for x in items])
                out[f"{metric}_mean"] = m
                out[f"{metric}_stdev"] = s
            w.writerow(out)


# Plotting

def _mean_of(rows: List[MetricRow], field: str, **match) -> float:
    vals = [getattr(r, field) for r in rows if all(getattr(r, k) == v for k, v in match.items())]
    return statistics.mean(vals) if vals else float("nan")

def _line_chart(x, series: Dict[str, List[float]], path: Path, title: str, ylabel: str,
                xlabel: Optional[str] = None, xticklabels: Optional[List[str]] = None) -> None:
    plt.figure()
    for label, y in series.items():
        plt.plot(x, y, marker="o", label=label)
    if xticklabels is not None:
        plt.xticks(x, xticklabels, rotation=20, ha="right")
    if xlabel:
        plt.xlabel(xlabel)
    plt.ylabel(ylabel)
    plt.title(title)
    plt.legend()
    plt.tight_layout()
    plt.savefig(path, dpi=200)
    plt.close()


def plot_experiment_1(rows: List[MetricRow], outdir: Path) -> None:
    exp_rows = [r for r in rows if r.exp_name == "exp1_distribution"]
    if not exp_rows:
        return

    datasets = sorted(set(r.dataset_name for r in exp_rows))
    x = list(range(len(datasets)))

    _line_chart(
        x,
        {p: [_mean_of(exp_rows, "compression_ratio", dataset_name=d, pipeline=p) for d in datasets] for p in PIPELINES},
        outdir / "exp1_compression_ratio.png",
        "Experiment 1: Compression Ratio by Distribution",
        "Compressed Bytes / Original Bytes",
        xticklabels=datasets,
    )

    fifo = huff.TIE_BREAK_FIFO
    _line_chart(
        x,
        {
            "avg code length": [_mean_of(exp_rows, "avg_code_length", dataset_name=d, pipeline=fifo) for d in datasets],
            "entropy": [_mean_of(exp_rows, "entropy_bits", dataset_name=d, pipeline=fifo) for d in datasets],
        },
        outdir / "exp1_code_length_vs_entropy.png",
        "Experiment 1: Average Code Length vs Entropy",
        "Bits per Symbol",
        xticklabels=datasets,
    )

    _line_chart(
        x,
        {p: [_mean_of(exp_rows, "total_ms", dataset_name=d, pipeline=p) for d in datasets] for p in PIPELINES},
        outdir / "exp1_total_time.png",
        "Experiment 1: Total Runtime by Distribution",
        "Total Time (ms) (build + encode + decode)",
        xticklabels=datasets,
    )


def plot_experiment_2(rows: List[MetricRow], outdir: Path) -> None:
    exp_rows = [r for r in rows if r.exp_name == "exp2_size_scaling"]
    if not exp_rows:
        return

    for dist in sorted(set(r.dataset_name for r in exp_rows)):
        dist_rows = [r for r in exp_rows if r.dataset_name == dist]
        sizes = sorted(set(r.file_size_bytes for r in dist_rows))

        for field, ylabel in (("encode_ms", "Encode Time (ms)"), ("decode_ms", "Decode Time (ms)")):
            _line_chart(
                sizes,
                {p: [_mean_of(dist_rows, field, file_size_bytes=s, pipeline=p) for s in sizes] for p in PIPELINES},
                outdir / f"exp2_{field}_{dist}.png",
                f"Experiment 2: {ylabel} vs Size ({dist})",
                ylabel,
                xlabel="File Size (bytes)",
            )


def plot_experiment_3(rows: List[MetricRow], outdir: Path) -> None:
    exp_rows = [r for r in rows if r.exp_name == "exp3_pipeline_compare"]
    if not exp_rows:
        return

    datasets = sorted(set(r.dataset_name for r in exp_rows))
    _line_chart(
        list(range(len(datasets))),
        {p: [_mean_of(exp_rows, "total_ms", dataset_name=d, pipeline=p) for d in datasets] for p in PIPELINES},
        outdir / "exp3_total_time.png",
        "Experiment 3: End-to-End Time by Dataset",
        "Total Time (ms) (build + encode + decode)",
        xticklabels=datasets,
    )


# Main

def parse_csv_list(s: str) -> List[str]:
    return [x.strip() for x in s.split(",") if x.strip()]

def size_series(min_bytes: int, max_bytes: int) -> List[int]:
    sizes: List[int] = []
    s = min_bytes
    while s <= max_bytes:
        sizes.append(s)
        s *= 2
    return sizes

def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--outdir", type=str, default="results", help="Output directory for CSV and plots")
    ap.add_argument("--runs", type=int, default=5, help="Repetitions per configuration (>=3 recommended for timing)")
    ap.add_argument("--seed", type=int, default=123, help="Base random seed")
    ap.add_argument("--verbose", action="store_true", help="Log pipeline details")

    # Experiment toggles
    ap.add_argument("--no_exp1", action="store_true", help="Disable experiment 1 (distribution)")
    ap.add_argument("--no_exp2", action="store_true", help="Disable experiment 2 (size scaling)")
    ap.add_argument("--no_exp3", action="store_true", help="Disable experiment 3 (pipeline compare)")

    # Experiment 1 controls
    ap.add_argument("--exp1_size_kb", type=int, default=256, help="Experiment 1 fixed file size in KB")
    ap.add_argument("--exp1_generators", type=str, default="uniform256,zipf128,repetitive90,english_like",
                    help="Comma-separated dataset generator names for experiment 1")

    # Experiment 2 controls
    ap.add_argument("--exp2_min_kb", type=int, default=4, help="Experiment 2 min size in KB (power-of-two growth)")
    ap.add_argument("--exp2_max_kb", type=int, default=2048, help="Experiment 2 max size in KB (power-of-two growth)")
    ap.add_argument("--exp2_generators", type=str, default="uniform256,zipf128,repetitive90",
                    help="Comma-separated dataset generator names for experiment 2")

    # Experiment 3 controls
    ap.add_argument("--exp3_size_kb", type=int, default=1024, help="Experiment 3 file size in KB")

    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    outdir = Path(args.outdir)
    safe_mkdir(outdir)

    rows: List[MetricRow] = []

    # Experiment 1: distributions (fixed size)
    if not args.no_exp1:
        fixed_size = max(1, args.exp1_size_kb) * 1024
        for gen_name in parse_csv_list(args.exp1_generators):
            logger.info("experiment 1: %s, %d bytes", gen_name, fixed_size)
            for run_id in range(1, args.runs + 1):
                dataset_name, data = generate_dataset(gen_name, fixed_size, args.seed + run_id)
                rows.extend(run_configuration("exp1_distribution", dataset_name, data, run_id))

    # Experiment 2: size scaling (multiple sizes, powers of 2)
    if not args.no_exp2:
        sizes = size_series(max(1, args.exp2_min_kb) * 1024, max(1, args.exp2_max_kb) * 1024)
        for gen_name in parse_csv_list(args.exp2_generators):
            for size_b in sizes:
                logger.info("experiment 2: %s, %d bytes", gen_name, size_b)
                for run_id in range(1, args.runs + 1):
                    dataset_name, data = generate_dataset(gen_name, size_b, args.seed + 10_000 + size_b + run_id)
                    rows.extend(run_configuration("exp2_size_scaling", dataset_name, data, run_id))

    # Experiment 3: pipeline compare on every generator, including the single-symbol edge case
    if not args.no_exp3:
        size_b = max(1, args.exp3_size_kb) * 1024
        for gen_name in sorted(GENERATOR_REGISTRY):
            logger.info("experiment 3: %s, %d bytes", gen_name, size_b)
            for run_id in range(1, args.runs + 1):
                dataset_name, data = generate_dataset(gen_name, size_b, args.seed + 200_000 + run_id + size_b)
                rows.extend(run_configuration("exp3_pipeline_compare", f"{dataset_name}_{size_b // 1024}kb", data, run_id))

    # Write raw and summary
    metrics_csv = outdir / "metrics.csv"
    summary_csv = outdir / "summary.csv"
    write_csv(metrics_csv, rows)
    group_summary(rows, summary_csv)

    # Plots
    plot_experiment_1(rows, outdir)
    plot_experiment_2(rows, outdir)
    plot_experiment_3(rows, outdir)

    ok_rate = sum(r.correctness_ok for r in rows) / max(1, len(rows))
    print(f"Wrote {len(rows)} rows to {metrics_csv}")
    print(f"Wrote grouped summary to {summary_csv}")
    print(f"Correctness rate across all runs: {ok_rate:.3f}")
    print("Charts saved in:", outdir.resolve())
    return 0 if ok_rate == 1.0 or not rows else 1


if __name__ == "__main__":
    raise SystemExit(main())
