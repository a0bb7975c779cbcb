# map_route/app/cli.py
import argparse
import json
import sys

from map_route.config.models import BuilderModel, SearchDiscoveryModel, SearchOptimalModel
from map_route.domain.entities.geography import Point
from map_route.domain.errors import InvalidIndexError, NoPathFoundError
from map_route.domain.mechanics.mechanics_factory import build_router
from map_route.domain.mechanics.mechanics_graph_builder import build_graph
from map_route.io.geojson import load_features
from map_route.io.search_logging import SearchLogging, default_json_logger
from map_route.io.snapshot import save_graph
from map_route.runtime.registries import make_lookup
from map_route.runtime.resources import load_graph_from_path


def _parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="map-route", description="Build road graphs and route on them.")
    p.add_argument("-v", "--verbose", action="store_true", help="JSON logs on stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    b = sub.add_parser("build", help="build a graph snapshot from GeoJSON")
    b.add_argument("source")
    b.add_argument("out")
    b.add_argument("--layout", choices=["nodes", "network"], default="network")
    b.add_argument("--fmt", choices=["json", "pickle"], default="json")
    b.add_argument("--lookup", choices=["hash", "linear"], default="hash")
    b.add_argument("--oneway-key", default="oneway")
    b.add_argument("--no-edges", action="store_true", help="omit the flat edge list")

    r = sub.add_parser("route", help="shortest path on a graph snapshot")
    r.add_argument("graph")
    r.add_argument("--fmt", choices=["json", "pickle"], default="json")
    where = r.add_mutually_exclusive_group(required=True)
    where.add_argument("--nodes", nargs=2, type=int, metavar=("START", "END"))
    where.add_argument("--points", nargs=4, type=float, metavar=("X1", "Y1", "X2", "Y2"))
    r.add_argument("--optimal", action="store_true", help="re-opening A* instead of visited-at-discovery")
    r.add_argument("--trace", action="store_true", help="include the search trace in the output")
    return p


def _build(args) -> int:
    builder = BuilderModel(lookup=args.lookup, keep_edges=not args.no_edges)
    feats = load_features(args.source, oneway_key=args.oneway_key)
    G = build_graph(feats, lookup=make_lookup(builder), keep_edges=builder.keep_edges)
    save_graph(G, args.out, fmt=args.fmt, layout=args.layout)
    print(json.dumps({"nodes": len(G), "edges": G.edge_count, "out": args.out}))
    return 0


def _route(args, hooks) -> int:
    G = load_graph_from_path(args.graph, args.fmt)
    if G is None:
        print(f"graph snapshot not found: {args.graph}", file=sys.stderr)
        return 2
    search = SearchOptimalModel() if args.optimal else SearchDiscoveryModel()
    router = build_router(search, G, hooks=hooks)

    try:
        if args.nodes:
            start, end = args.nodes
        else:
            x1, y1, x2, y2 = args.points
            start, end = router.nearest_node(Point(x1, y1)), router.nearest_node(Point(x2, y2))
        res = router.find_path(start, end)
    except InvalidIndexError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    out = res.to_dict()
    if not args.trace:
        out.pop("trace")
    print(json.dumps(out))
    try:
        res.raise_for_status()
    except NoPathFoundError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parser().parse_args(argv)
    hooks = None
    if args.verbose:
        hooks = SearchLogging(logger=default_json_logger(level="INFO", stream=sys.stderr))
    if args.cmd == "build":
        return _build(args)
    return _route(args, hooks)


if __name__ == "__main__":
    sys.exit(main())
