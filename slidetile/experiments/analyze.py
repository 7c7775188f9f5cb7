#!/usr/bin/env python3
from __future__ import annotations
import argparse, glob, os
from pathlib import Path
from typing import Iterable
import pandas as pd

GROUP = ["heuristic", "tie_break", "rows", "cols", "steps"]
METRICS = ["explored", "generated", "duplicates", "path_len", "time_sec"]


def load_many(patterns: Iterable[str]) -> pd.DataFrame:
    """Concatenate runner CSVs; numeric columns coerced, blanks become NaN."""
    dfs = []
    for pat in patterns:
        for fn in sorted(glob.glob(pat)):
            df = pd.read_csv(fn)
            df["__src__"] = os.path.basename(fn)
            dfs.append(df)
    if not dfs:
        return pd.DataFrame()
    df = pd.concat(dfs, ignore_index=True, sort=False)
    for c in ["rows", "cols", "steps", "seed", "solvable"] + METRICS:
        if c in df.columns:
            df[c] = pd.to_numeric(df[c], errors="coerce")
    if "termination" in df.columns:
        df["termination"] = df["termination"].fillna("ok")
    return df


def summarize(df: pd.DataFrame, solved_only: bool = True) -> pd.DataFrame:
    """mean/std/min/max of each metric per (heuristic, tie_break, board, steps)."""
    if df.empty:
        return df
    if solved_only:
        df = df[df["termination"] == "ok"]
        if "solvable" in df.columns:
            df = df[df["solvable"] == 1]
    keys = [c for c in GROUP if c in df.columns]
    metrics = [m for m in METRICS if m in df.columns]
    out = df.groupby(keys)[metrics].agg(["mean", "std", "min", "max"])
    out.columns = [f"{m}_{stat}" for m, stat in out.columns]
    out["n"] = df.groupby(keys).size()
    return out.reset_index()


def termination_counts(df: pd.DataFrame) -> pd.DataFrame:
    keys = [c for c in ("heuristic", "rows", "cols", "solvable") if c in df.columns]
    return df.groupby(keys + ["termination"]).size().unstack(fill_value=0).reset_index()


def main(argv=None):
    ap = argparse.ArgumentParser(description="Summarize runner CSVs.")
    ap.add_argument("csv", nargs="+", help="CSV files or glob patterns")
    ap.add_argument("--all", action="store_true", help="Include budget/exhausted/unsolvable rows")
    ap.add_argument("--out", type=Path, default=None, help="Optional summary CSV")
    args = ap.parse_args(argv)

    df = load_many(args.csv)
    if df.empty:
        print("No rows to analyze. Are your CSVs empty?")
        return

    summary = summarize(df, solved_only=not args.all)
    with pd.option_context("display.max_columns", None, "display.width", 160):
        print("=" * 80)
        print("Solved runs per heuristic / board / shuffle steps")
        print("=" * 80)
        print(summary.to_string(index=False, float_format=lambda x: f"{x:.2f}"))
        print("\nTerminations:")
        print(termination_counts(df).to_string(index=False))

    if args.out is not None:
        args.out.parent.mkdir(parents=True, exist_ok=True)
        summary.to_csv(args.out, index=False)
        print(f"\nSaved: {args.out}")


if __name__ == "__main__":
    main()
