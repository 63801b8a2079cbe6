#!/usr/bin/env python3
"""
Command line tool for building and querying the airport shards.

    ourairports fetch -d data            # download airports.csv, write shards
    ourairports minify -d data -o dist   # compact shard JSON
    ourairports search -d data --iata PEK
    ourairports search --country CN --type large_airport --scheduled
    ourairports search --near 40.08 116.60 --radius 10
"""

import sys
import json
import argparse
import logging
from typing import List, Optional

from .models.airport import AirportFilter
from .models.validation import ValidationError, ShardLoadError
from .ourairports import OurAirports
from .sources.cdn import DEFAULT_CDN_BASE_URL
from .sources.ourairports_csv import OurAirportsCsvSource, AIRPORTS_CSV_URL
from .utils.shard_writer import minify_directory

logger = logging.getLogger(__name__)


def run_fetch(args) -> int:
    source = OurAirportsCsvSource(cache_dir=args.cache_dir, url=args.url)
    if args.force_refresh:
        source.set_force_refresh()
    if args.never_refresh:
        source.set_never_refresh()
    written = source.build_shards(args.data_dir, indent=None if args.compact else 2)
    logger.info(f"Wrote {len(written)} shards to {args.data_dir}")
    return 0


def run_minify(args) -> int:
    stats = minify_directory(args.data_dir, args.output or args.data_dir)
    original = sum(s.original_size for s in stats)
    minified = sum(s.minified_size for s in stats)
    if original:
        logger.info(
            f"Total: {original / 1024:.2f} KB -> {minified / 1024:.2f} KB "
            f"(saved {(1 - minified / original) * 100:.1f}%)"
        )
    return 0


def run_search(args) -> int:
    airports = OurAirports(data_dir=args.data_dir, base_url=args.base_url, cache_dir=args.cache_dir)
    airports.init()

    if args.iata:
        found = airports.find_by_iata_code(args.iata)
        results = [found] if found else []
    elif args.icao:
        found = airports.find_by_icao_code(args.icao)
        results = [found] if found else []
    elif args.near:
        results = airports.find_airports_in_radius(args.near[0], args.near[1], args.radius)
    else:
        results = airports.search_airports(AirportFilter(
            type=args.type,
            country=args.country,
            continent=args.continent,
            has_iata_code=args.has_iata,
            has_scheduled_service=args.scheduled,
        ))

    if args.limit is not None:
        results = results[:args.limit]
    json.dump([r.to_dict() for r in results], sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write('\n')
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='OurAirports shard builder and query tool')
    parser.add_argument('-v', '--verbose', help='Verbose output', action='store_true')
    parser.add_argument('-c', '--cache-dir', help='Directory to cache downloads')
    subparsers = parser.add_subparsers(dest='command', required=True)

    fetch = subparsers.add_parser('fetch', help='Download airports.csv and write the five shards')
    fetch.add_argument('-d', '--data-dir', help='Directory to write shards to', default='data')
    fetch.add_argument('--url', help='airports.csv URL', default=AIRPORTS_CSV_URL)
    fetch.add_argument('--compact', help='Write minified JSON', action='store_true')
    fetch.add_argument('--force-refresh', help='Force refresh of cached data', action='store_true')
    fetch.add_argument('--never-refresh', help='Never refresh cached data if it exists', action='store_true')
    fetch.set_defaults(func=run_fetch)

    minify = subparsers.add_parser('minify', help='Minify the JSON files of a directory')
    minify.add_argument('-d', '--data-dir', help='Directory with shard files', default='data')
    minify.add_argument('-o', '--output', help='Output directory (default: in place)')
    minify.set_defaults(func=run_minify)

    search = subparsers.add_parser('search', help='Query the dataset and print matches as JSON')
    search.add_argument('-d', '--data-dir', help='Directory with shard files (default: ./data or CDN)')
    search.add_argument('--base-url', help='CDN base URL', default=DEFAULT_CDN_BASE_URL)
    search.add_argument('--iata', help='Find by IATA code')
    search.add_argument('--icao', help='Find by ICAO code')
    search.add_argument('--near', help='Center of a radius search', nargs=2, type=float, metavar=('LAT', 'LON'))
    search.add_argument('--radius', help='Radius in km for --near', type=float, default=50.0)
    search.add_argument('--type', help='Airport type')
    search.add_argument('--country', help='ISO country code')
    search.add_argument('--continent', help='Continent code')
    search.add_argument('--has-iata', help='Only airports with an IATA code', action='store_true', default=None)
    search.add_argument('--scheduled', help='Only airports with scheduled service', action='store_true', default=None)
    search.add_argument('--limit', help='Maximum number of results', type=int)
    search.set_defaults(func=run_search)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        return args.func(args)
    except ValidationError as e:
        logger.error(f"Invalid query: {e}")
        return 2
    except (ShardLoadError, ValueError, OSError) as e:
        logger.error(f"{args.command} failed: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
