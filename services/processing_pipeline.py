"""
Processing Pipeline — Full Pipeline Orchestrator.

Coordinates the detection pipeline:
   1. Build the transaction graph
   2. Cycle detection
   3. Smurfing detection (fan-in / fan-out)
   4. Shell chain detection
   5. Scoring, ring risk, summary and graph snapshot

The three detectors only read the graph; the scoring engine combines their
output once all of them have finished.

Performance: cycle and shell detection are exponential on dense graphs, so
callers should cap input size (see MAX_TRANSACTIONS).
Memory: O(V + E) for graph + O(R) for rings.
"""

import contextlib
import logging
import time
from typing import Any, Dict, Iterable, Mapping, Optional, Union

import pandas as pd

from core.graph.graph_builder import TransactionGraph
from core.ring_detection.smurfing import detect_smurfing
from core.scoring_engine import ScoringEngine
from core.structural.cycle_detection import detect_cycles
from core.structural.shell_detection import detect_shell_chains

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def log_timer(label: str):
    start = time.time()
    yield
    elapsed = time.time() - start
    logger.info("Module [%s] took %.4f seconds", label, elapsed)


class ProcessingService:
    """Orchestrates the complete money-muling detection pipeline."""

    def __init__(self, scoring_engine: Optional[ScoringEngine] = None):
        self.scoring_engine = scoring_engine or ScoringEngine()
        self.graph: Optional[TransactionGraph] = None

    def build_graph(
        self, transactions: Union[pd.DataFrame, Iterable[Mapping[str, Any]]]
    ) -> TransactionGraph:
        if isinstance(transactions, pd.DataFrame):
            return TransactionGraph.from_dataframe(transactions)
        return TransactionGraph().ingest(transactions)

    def process(
        self, transactions: Union[pd.DataFrame, Iterable[Mapping[str, Any]]]
    ) -> Dict[str, Any]:
        """
        Run the full pipeline on one transaction batch.

        Returns:
            JSON-compatible dict with suspicious_accounts, fraud_rings,
            summary, and graph_data.
        """
        t_start = time.time()

        # 1. Build graph
        with log_timer("graph_builder"):
            graph = self.build_graph(transactions)
        self.graph = graph
        logger.info(
            "Graph built: %d accounts, %d transactions",
            graph.number_of_accounts,
            len(graph.transactions),
        )

        # 2. Cycle detection
        with log_timer("cycle_detection"):
            cycles = detect_cycles(graph)

        # 3. Smurfing detection
        with log_timer("smurfing_detection"):
            fan_in_rings, fan_out_rings = detect_smurfing(graph)

        # 4. Shell chain detection
        with log_timer("shell_chain_detection"):
            shell_rings = detect_shell_chains(graph)

        processing_time = time.time() - t_start

        # 5. Scoring + report
        with log_timer("scoring"):
            result = self.scoring_engine.run(
                graph,
                cycles,
                fan_in_rings,
                fan_out_rings,
                shell_rings,
                processing_time_seconds=processing_time,
            )

        logger.info(
            "Detected %d rings, flagged %d accounts",
            result["summary"]["fraud_rings_detected"],
            result["summary"]["suspicious_accounts_flagged"],
        )
        return result
