from __future__ import annotations

import argparse
import pathlib
import sys

from typing import Callable, Optional

import gcorrect.constants as c
from gcorrect import __version__
from gcorrect.exceptions import ParamError, InputError
from gcorrect.logger import get_main_logger, attach_stream_handler, log_levels


def _add_ratio_arg(parser):
    parser.add_argument(
        "--g-addition-ratio", "-r",
        type=float,
        default=c.DEFAULT_G_ADDITION_RATIO,
        help="Chance (P) of a true CAGE start site read acquiring an additional, non-templated G. Must be in (0, 1]. "
             "The default comes from supplementary note 3e of Nature Genet. 38:626-35.")


def _add_output_args(parser):
    parser.add_argument(
        "--output", "-o",
        type=str,
        default="stdout",
        help="Path to write corrected CTSS BED6 records to. The name column holds internal values of the correction "
             "and the score column holds the corrected count.")


def add_correct_parser_args(correct_parser):
    correct_parser.add_argument(
        "read_file",
        type=str,
        help="Coordinate-sorted SAM/BAM/CRAM file of CAGE reads. Developed for STAR with '--alignEndsType Local' "
             "(the default), which soft-clips additional Gs; other aligners may handle them differently.")

    correct_parser.add_argument(
        "--chrom-sizes", "-c",
        type=str,
        required=True,
        help="Chromosome size table (as used by BEDtools): contig name and length, tab-separated.")

    correct_parser.add_argument(
        "--ref", "-g",
        type=str,
        required=True,
        help="Path to the reference genome, FASTA-formatted and indexed.")

    correct_parser.add_argument(
        "--min-mapq", "-q",
        type=int,
        default=c.DEFAULT_MIN_MAPQ,
        help="Minimum mapping quality for a read to be counted.")

    _add_ratio_arg(correct_parser)

    correct_parser.add_argument(
        "--processes", "-p",
        type=int,
        default=1,
        choices=(1, 2),
        help="Number of processes to use; with 2, each strand is processed in its own process.")

    _add_output_args(correct_parser)

    correct_parser.add_argument(
        "--json", "-j",
        type=str,
        help="Path to write a JSON-formatted run report (parameters, per-strand state counts, runtime) to. If the "
             "value is set to 'stdout', JSON will be written to stdout, after the BED records.")

    correct_parser.add_argument(
        "--indent-json", "-i",
        action="store_true",
        help="If passed alongside --json [x], the JSON output will be indented to be more human readable but "
             "less compact.")


def add_correct_table_parser_args(ct_parser):
    ct_parser.add_argument(
        "--plus",
        type=str,
        help="Per-base table for the plus strand: chrom, start, end, X, A0, reference base; tab-separated, one base "
             "per line, sorted by contig and ascending start, with zero-count bases around each run of counts.")

    ct_parser.add_argument(
        "--minus",
        type=str,
        help="Per-base table for the minus strand, in the same format and order as --plus (reference bases from the "
             "forward strand.)")

    _add_ratio_arg(ct_parser)
    _add_output_args(ct_parser)


def _exec_correct(p_args) -> None:
    from gcorrect.ctss import correct_sample, CorrectionParams
    logger = get_main_logger(log_levels[p_args.log_level])
    correct_sample(
        CorrectionParams.from_args(logger, p_args),
        output_path=p_args.output,
        json_path=p_args.json,
        indent_json=p_args.indent_json,
    )


def _exec_correct_table(p_args) -> None:
    from gcorrect.ctss.merge import correct_strands
    from gcorrect.ctss.output import output_bed
    from gcorrect.ctss.params import validate_g_addition_ratio
    from gcorrect.ctss.table import parse_per_base_table

    if not p_args.plus and not p_args.minus:
        raise ParamError("At least one of --plus or --minus must be given")

    for table in (p_args.plus, p_args.minus):
        if table and not pathlib.Path(table).exists():
            raise ParamError(f"Could not find per-base table at '{table}'")

    p = validate_g_addition_ratio(p_args.g_addition_ratio)

    results = correct_strands(
        parse_per_base_table(p_args.plus) if p_args.plus else (),
        parse_per_base_table(p_args.minus) if p_args.minus else (),
        p,
    )

    if p_args.output == "stdout":
        output_bed(results, sys.stdout)
        sys.stdout.flush()
    else:
        with open(p_args.output, "w") as of:
            output_bed(results, of)


def main(args: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Correct CAGE transcription start site counts for non-templated additional Gs.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter)

    parser.add_argument("--version", "-v", action="version", version=__version__)

    subparsers = parser.add_subparsers()

    def _make_subparser(arg: str, help_text: str, exec_func: Callable, arg_func: Callable):
        sp = subparsers.add_parser(arg, help=help_text, formatter_class=argparse.ArgumentDefaultsHelpFormatter)
        sp.add_argument("--log-level", type=str, default="info", choices=("error", "warning", "info", "debug"))
        sp.set_defaults(func=exec_func)
        arg_func(sp)

    _make_subparser(
        "correct",
        help_text="Build a G-corrected CTSS BED file from CAGE read alignments.",
        exec_func=_exec_correct,
        arg_func=add_correct_parser_args)

    _make_subparser(
        "correct-table",
        help_text="Run the G correction on pre-computed per-base count tables.",
        exec_func=_exec_correct_table,
        arg_func=add_correct_table_parser_args)

    args = args or sys.argv[1:]
    p_args = parser.parse_args(args)

    if not getattr(p_args, "func", None):
        parser.print_usage(sys.stderr)
        return 1

    ll = log_levels[p_args.log_level]
    logger = get_main_logger(ll)
    attach_stream_handler(ll, logger)

    try:
        logger.info(f"gcorrect version {__version__}")
        p_args.func(p_args)
        return 0
    except ParamError as e:
        logger.critical(f"Parameter error: {e}")
        return 1
    except InputError as e:
        logger.critical(f"Input error: {e}")
        return 1


if __name__ == "__main__":
    exit(main())
