import argparse
import logging
import sys

from .config import GRASPConfig
from .datasets import BASELINES, BERLIN52, INSTANCES
from .evaluation import GRASPEvaluation
from .search import GRASP

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='grasp-tsp', description="GRASP solver for the Euclidean TSP.")
    parser.add_argument('command', nargs='?', choices=['solve', 'benchmark'], default='solve',
                        help="solve berlin52 once, or benchmark it over several seeds")
    parser.add_argument('--iterations', type=int, default=50, help="outer restarts")
    parser.add_argument('--no-improvements', type=int, default=50,
                        help="consecutive failed 2-opt moves ending a local search")
    parser.add_argument('--alpha', type=float, default=0.3, help="greediness factor in [0, 1]")
    parser.add_argument('--seed', type=int, default=None)
    parser.add_argument('--workers', type=int, default=1, help="threads running restarts")
    parser.add_argument('--time-limit', type=float, default=None, help="seconds")
    parser.add_argument('--seeds', type=int, default=5, help="benchmark: number of seeds")
    parser.add_argument('--output', default='grasp_results.csv', help="benchmark: CSV output path")
    parser.add_argument('-v', '--verbose', action='store_true')
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        config = GRASPConfig(
            max_iterations=args.iterations,
            max_no_improvements=args.no_improvements,
            greediness_factor=args.alpha,
            seed=args.seed,
            n_workers=args.workers,
            time_limit=args.time_limit,
        )
    except ValueError as exc:
        parser.error(str(exc))

    if args.command == 'benchmark':
        first_seed = args.seed if args.seed is not None else 0
        evaluator = GRASPEvaluation(
            instances=INSTANCES,
            seeds=range(first_seed, first_seed + args.seeds),
            config=config,
            num_threads=args.workers,
            output_csv_path=args.output,
            baselines=BASELINES,
        )
        for row in evaluator.evaluate():
            print(row)
        return 0

    result = GRASP(config).search(BERLIN52)
    print(f"Done. Best solution: c={result.cost}, v={result.order.tolist()}")
    logger.info("found at iteration #%d of %d in %.2fs", result.iteration + 1, result.iterations_run, result.elapsed)
    return 0


if __name__ == '__main__':
    sys.exit(main())
