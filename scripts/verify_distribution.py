"""
Run the detection pipeline over a CSV file and print the score distribution.

Usage:
    python scripts/verify_distribution.py data/transactions.csv [--out report.json]
"""

import argparse
import json
import logging
import os
import sys
import time

import numpy as np
import pandas as pd

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from services.processing_pipeline import ProcessingService  # noqa: E402
from utils.validators import validate_csv  # noqa: E402

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


def verify(csv_path: str, out_path: str | None = None) -> int:
    if not os.path.exists(csv_path):
        logger.error("Dataset not found: %s", csv_path)
        return 1

    df = pd.read_csv(csv_path, dtype=str)
    error = validate_csv(df)
    if error:
        logger.error("Invalid dataset: %s", error)
        return 1

    start_time = time.time()
    results = ProcessingService().process(df)
    proc_time = time.time() - start_time
    print(f"Processing Time: {proc_time:.2f} seconds")

    summary = results["summary"]
    print(f"Accounts analyzed: {summary['total_accounts_analyzed']}")
    print(f"Fraud rings: {summary['fraud_rings_detected']}")

    scores = np.array([a["suspicion_score"] for a in results["suspicious_accounts"]])
    if scores.size == 0:
        print("No suspicious accounts found.")
    else:
        print(f"Total Suspicious Accounts: {scores.size}")
        print(f"Max Score: {scores.max():.1f}")
        print(f"Min Score: {scores.min():.1f}")
        print(f"Avg Score: {scores.mean():.2f}")
        p50, p90, p99 = np.percentile(scores, [50, 90, 99])
        print(f"P50 / P90 / P99: {p50:.1f} / {p90:.1f} / {p99:.1f}")

        high_risk = int(np.sum(scores >= 70))
        med_risk = int(np.sum((scores >= 40) & (scores < 70)))
        low_risk = int(np.sum(scores < 40))
        print("\nScore Distribution:")
        print(f"  High Risk (>=70): {high_risk} ({high_risk / scores.size * 100:.1f}%)")
        print(f"  Med Risk (40-69): {med_risk} ({med_risk / scores.size * 100:.1f}%)")
        print(f"  Low Risk (<40):   {low_risk} ({low_risk / scores.size * 100:.1f}%)")

    pattern_counts = pd.Series(
        [r["pattern_type"] for r in results["fraud_rings"]], dtype=object
    ).value_counts()
    if not pattern_counts.empty:
        print("\nRings by pattern:")
        for pattern, count in pattern_counts.items():
            print(f"  {pattern}: {count}")

    if out_path:
        with open(out_path, "w", encoding="utf-8") as fh:
            json.dump(results, fh, indent=2)
        logger.info("Report written to %s", out_path)

    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Score distribution for a transaction CSV")
    parser.add_argument("csv_path", help="CSV with sender_id, receiver_id, amount, timestamp")
    parser.add_argument("--out", default=None, help="Optional path for the JSON report")
    args = parser.parse_args()
    return verify(args.csv_path, args.out)


if __name__ == "__main__":
    sys.exit(main())
