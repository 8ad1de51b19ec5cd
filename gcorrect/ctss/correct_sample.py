from __future__ import annotations

import logging
import multiprocessing as mp
import multiprocessing.dummy as mpd
import os
import sys
import time

from collections import Counter
from datetime import datetime
from typing import Iterable, Optional

import gcorrect.constants as c
from .chrom_sizes import load_chrom_sizes
from .collect import iter_strand_records
from .correction import correct_strand
from .merge import merge_strands
from .output import output_bed, output_json_report
from .params import CorrectionParams
from .strand import normalize_minus_strand
from .types import CorrectedRecord, PerBaseRecord, Strand

__all__ = [
    "strand_worker",
    "summarize_strand",
    "correct_sample",
]


def strand_worker(
    strand: Strand,
    params: CorrectionParams,
    chrom_sizes: dict[str, int],
    is_single_processed: bool,
) -> list[CorrectedRecord]:
    lg: logging.Logger
    if is_single_processed:
        from gcorrect.logger import get_main_logger
        lg = get_main_logger()
    else:
        from gcorrect.logger import create_process_logger
        lg = create_process_logger(os.getpid(), params.log_level)

    start_time = time.perf_counter()

    records: Iterable[PerBaseRecord] = iter_strand_records(
        params.read_file,
        params.reference_file,
        chrom_sizes,
        strand,
        params.min_mapq,
        lg,
    )

    if strand == c.STRAND_MINUS:
        # needs the whole strand in memory to reverse the reading order
        records = normalize_minus_strand(records)

    results = list(correct_strand(records, params.g_addition_ratio, strand))

    lg.info(f"Corrected {len(results)} bases on strand {strand} in {(time.perf_counter() - start_time):.2f}s")

    return results


def summarize_strand(results: Iterable[CorrectedRecord]) -> dict[str, int | dict[str, int]]:
    states: Counter = Counter()
    n_reads = 0
    n_corrected = 0

    for r in results:
        states[r.state] += 1
        n_reads += r.x
        n_corrected += r.score

    return {
        "bases": sum(states.values()),
        "states": {s: states[s] for s in c.STATES},
        "reads": n_reads,
        "corrected_reads": n_corrected,
    }


def correct_sample(
    params: CorrectionParams,
    output_path: str = "stdout",
    json_path: Optional[str] = None,
    indent_json: bool = False,
) -> None:
    from gcorrect.logger import get_main_logger
    logger = get_main_logger()

    start_time = datetime.now()

    logger.info(
        f"Starting G correction; reads={params.read_file}, P={params.g_addition_ratio}, MAPQ>={params.min_mapq}")

    chrom_sizes = load_chrom_sizes(params.chrom_sizes_file)
    logger.info(f"Loaded sizes for {len(chrom_sizes)} contigs")

    is_single_processed = params.processes == 1

    pool_class = mpd.Pool if is_single_processed else mp.Pool
    with pool_class(params.processes) as p:
        jobs = {
            strand: p.apply_async(strand_worker, (strand, params, chrom_sizes, is_single_processed))
            for strand in c.STRANDS
        }
        # Both strands must be finished before merging; an exception in either worker is re-raised here.
        strand_results: dict[str, list[CorrectedRecord]] = {strand: j.get() for strand, j in jobs.items()}
        del jobs

    summary = {strand: summarize_strand(res) for strand, res in strand_results.items()}

    results = merge_strands(strand_results[c.STRAND_PLUS], strand_results[c.STRAND_MINUS])
    del strand_results

    if output_path == "stdout":
        n_written = output_bed(results, sys.stdout)
        sys.stdout.flush()
    else:
        with open(output_path, "w") as of:
            n_written = output_bed(results, of)

    time_taken = datetime.now() - start_time

    logger.info(f"Finished G correction in {time_taken.total_seconds():.1f}s; wrote {n_written} CTSS records")

    if json_path:
        output_json_report(params, summary, time_taken, json_path, indent_json)
