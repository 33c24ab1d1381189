#!/usr/bin/env python3
"""Benchmark project global search: client latency (p50, p95, p99), QPS and server searchTime.

Usage:
  export API_URL=http://localhost:8000
  python scripts/bench_search.py --project-id <uuid> [--num-queries 200] [--query "argument"]

The project must already exist with folders, documents and annotations.
"""
from __future__ import annotations

import argparse
import os
import statistics
import sys
import time

import httpx

DEFAULT_QUERIES = ("argument", "evidence of decline", "methodology", "climate policy", "qualitative interviews")


def percentile(sorted_values: list[float], fraction: float) -> float:
    index = max(0, min(len(sorted_values) - 1, int(len(sorted_values) * fraction) - 1))
    return sorted_values[index]


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark project global search")
    parser.add_argument("--project-id", required=True, help="Project to search")
    parser.add_argument("--num-queries", type=int, default=100, help="Number of search requests")
    parser.add_argument("--query", action="append", help="Query text (repeatable); defaults to a fixed set")
    parser.add_argument("--limit", type=int, default=20, help="Result limit per request")
    parser.add_argument("--output", type=str, default="", help="Optional output file path")
    args = parser.parse_args()

    api_url = os.environ.get("API_URL", "http://localhost:8000").rstrip("/")
    queries = args.query or list(DEFAULT_QUERIES)
    url = f"{api_url}/v1/projects/{args.project_id}/search"

    latencies: list[float] = []
    server_times: list[int] = []
    total_results: list[int] = []
    errors = 0
    print(f"Running {args.num_queries} search requests against {url} ...")
    start_total = time.perf_counter()
    with httpx.Client(timeout=30.0) as client:
        for i in range(args.num_queries):
            t0 = time.perf_counter()
            r = client.post(url, json={"query": queries[i % len(queries)], "limit": args.limit})
            elapsed = time.perf_counter() - t0
            if r.status_code != 200:
                errors += 1
                continue
            body = r.json()
            latencies.append(elapsed)
            server_times.append(body["searchTime"])
            total_results.append(body["totalResults"])
    total_elapsed = time.perf_counter() - start_total

    n = len(latencies)
    if n == 0:
        print("No successful searches.")
        return 1

    ordered = sorted(latencies)
    summary = (
        f"Global search benchmark (queries={n}, errors={errors})\n"
        f"  QPS: {n / total_elapsed:.2f}\n"
        f"  Latency: p50={statistics.median(ordered) * 1000:.1f} ms, "
        f"p95={percentile(ordered, 0.95) * 1000:.1f} ms, "
        f"p99={percentile(ordered, 0.99) * 1000:.1f} ms\n"
        f"  Server searchTime: mean={statistics.mean(server_times):.1f} ms, max={max(server_times)} ms\n"
        f"  Hits per query: mean={statistics.mean(total_results):.1f}\n"
        f"  Total time: {total_elapsed:.2f} s\n"
    )
    print(summary)

    if args.output:
        os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(summary)
        print(f"Wrote {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
