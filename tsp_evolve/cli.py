import argparse
import json
import random
import time
from dataclasses import asdict
from pathlib import Path
from typing import Dict, List

from tsp_evolve.data import Instance, load_instance, random_instance
from tsp_evolve.evaluation import GenerationStats, SolveResult, history_table, solve_result
from tsp_evolve.evolutionary import EvolutionConfig, GeneticEngine


def log(msg: str) -> None:
    ts = time.strftime("%H:%M:%S")
    print(f"[{ts}] {msg}", flush=True)


def save_result(
    result: SolveResult, cfg: EvolutionConfig, history: List[GenerationStats], path: Path
) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    state = {
        "tour": result.tour,
        "distance": result.distance,
        "graph_length": result.graph_length,
        "optimum": result.optimum,
        "gap": result.gap,
        "config": asdict(cfg),
        "history": [s.to_dict() for s in history],
    }
    path.write_text(json.dumps(state, indent=2))


def load_result(path: Path) -> Dict:
    return json.loads(path.read_text())


def _build_instance(args, rng: random.Random) -> Instance:
    if args.tsp:
        return load_instance(Path(args.tsp))
    return random_instance(args.cities, rng)


def _print_result(result: SolveResult) -> None:
    print("Best route found:", result.tour)
    print("Distance:", result.distance)
    if result.gap is not None:
        print(f"Optimum: {result.optimum:.2f} (gap {result.gap:.2%} on TSPLIB weights)")


def run(args, parser: argparse.ArgumentParser) -> None:
    cfg = EvolutionConfig(
        population_size=args.population_size,
        generations=args.generations,
        mutation_rate=args.mutation_rate,
        random_seed=args.seed,
    )
    try:
        cfg.validate()
    except ValueError as exc:
        parser.error(str(exc))
    if args.tsp is None and args.cities < 2:
        parser.error(f"--cities must be at least 2, got {args.cities}")

    rng = random.Random(cfg.random_seed)
    instance = _build_instance(args, rng)
    log(f"instance {instance.name}: {len(instance.cities)} cities")

    def on_generation(stats: GenerationStats) -> None:
        if args.log_every and stats.generation % args.log_every == 0:
            log(
                f"gen {stats.generation}: best={stats.best:.2f} mean={stats.mean:.2f} "
                f"best_seen={stats.best_seen:.2f}"
            )

    t0 = time.perf_counter()
    engine = GeneticEngine(cfg, instance.cities, rng=rng, on_generation=on_generation)
    best = engine.run()
    log(f"{engine.generation} generations in {time.perf_counter() - t0:.2f}s")

    table = history_table(engine.history)
    if len(table):
        log(f"best distance {table[0, 4]:.2f} -> {table[-1, 4]:.2f}")

    result = solve_result(best, instance.graph, instance.optimum)
    _print_result(result)
    if args.output:
        save_result(result, cfg, engine.history, Path(args.output))
        log(f"saved result to {args.output}")


def show(args, parser: argparse.ArgumentParser) -> None:
    path = Path(args.path)
    if not path.exists():
        parser.error(f"no result file at {path}")
    state = load_result(path)
    result = SolveResult(
        tour=state["tour"],
        distance=state["distance"],
        graph_length=state["graph_length"],
        optimum=state.get("optimum"),
    )
    cfg = state.get("config", {})
    print(
        f"population={cfg.get('population_size')} generations={cfg.get('generations')} "
        f"mutation_rate={cfg.get('mutation_rate')} seed={cfg.get('random_seed')}"
    )
    _print_result(result)


def main(argv: List[str] = None) -> None:
    parser = argparse.ArgumentParser(description="Genetic-algorithm TSP solver")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Evolve a tour over random or TSPLIB cities")
    run_parser.add_argument("--cities", type=int, default=20, help="number of random cities")
    run_parser.add_argument("--tsp", default=None, help="TSPLIB .tsp file with node coordinates")
    run_parser.add_argument("--population-size", type=int, default=100)
    run_parser.add_argument("--generations", type=int, default=1000)
    run_parser.add_argument("--mutation-rate", type=float, default=0.02)
    run_parser.add_argument("--seed", type=int, default=123)
    run_parser.add_argument("--log-every", type=int, default=100, help="0 disables progress output")
    run_parser.add_argument("--output", default=None, help="write the result as JSON")
    run_parser.set_defaults(func=run)

    show_parser = subparsers.add_parser("show", help="Print a saved result")
    show_parser.add_argument("path")
    show_parser.set_defaults(func=show)

    args = parser.parse_args(argv)
    args.func(args, parser)


if __name__ == "__main__":
    main()
