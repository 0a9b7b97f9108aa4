#!/usr/bin/env python3
"""
Command line driver for knockout brackets stored as YAML files.

Usage:
    python src/bracket_cli.py generate data/club-open-config.yaml --out data/club-open.yaml
    python src/bracket_cli.py result data/club-open.yaml R1-M2 6 3
    python src/bracket_cli.py advance data/club-open.yaml R2-M1
    python src/bracket_cli.py show data/club-open.yaml

Exit codes:
    0: Success
    1: Rejected input (bad configuration, unknown match, invalid score, ...)
       or a generate that would replace an existing bracket
    2: Usage error
"""
import argparse
import logging
import sys

from knockout import (
    BracketError, InvalidScore, advance_winner, award_points, bracket_summary,
    generate_bracket, matches_in_round, record_result, round_name,
)
from knockout.config import bracket_file_path, load_tournament_config
from knockout.models import BYE_STATE, COMPLETED
from knockout.storage import BracketStore

logger = logging.getLogger('knockout.cli')


def _parse_score(value):
    try:
        return int(value)
    except ValueError:
        raise InvalidScore(f"Scores must be whole numbers, got {value!r}") from None


def _describe_side(side):
    if side.is_entrant:
        return str(side.entrant_id)
    if side.is_bye:
        return 'BYE'
    return f'Winner {side.source}'


def format_bracket(bracket):
    lines = []
    for round_number in range(1, bracket.total_rounds + 1):
        lines.append(f"# {round_name(bracket, round_number)}")
        for match in matches_in_round(bracket, round_number):
            line = f"  {match.match_id}: {_describe_side(match.side_a)} vs {_describe_side(match.side_b)}"
            if match.state == BYE_STATE or match.walkover:
                line += f"  (bye) -> {match.winner}"
            elif match.state == COMPLETED:
                line += f"  {match.score_a}-{match.score_b} -> {match.winner}"
            lines.append(line)

    summary = bracket_summary(bracket)
    if summary['held']:
        lines.append(f"Waiting to advance: {', '.join(summary['held'])}")
    if summary['champion'] is not None:
        lines.append(f"Champion: {summary['champion']}")
    if bracket.points_by_round:
        awarded = sorted(award_points(bracket).items(), key=lambda item: -item[1])
        lines.append(f"Points: {', '.join(f'{entrant_id} {points}' for entrant_id, points in awarded)}")
    return '\n'.join(lines)


def cmd_generate(args):
    config = load_tournament_config(args.config)
    draw_size = args.draw_size if args.draw_size is not None else config['draw_size']
    seed_count = args.seed_count if args.seed_count is not None else config['seed_count']

    bracket = generate_bracket(config['entrants'], draw_size=draw_size, seed_count=seed_count,
                               points_by_round=config['points_by_round'])
    store = BracketStore(args.out or bracket_file_path(config['name']))
    store.create(bracket, overwrite=args.force)
    print(f"Saved bracket to {store.file_path}")
    print(format_bracket(bracket))


def cmd_result(args):
    score_a = _parse_score(args.score_a)
    score_b = _parse_score(args.score_b)
    bracket = BracketStore(args.file).apply(record_result, args.match_id, score_a, score_b)
    print(format_bracket(bracket))


def cmd_advance(args):
    bracket = BracketStore(args.file).apply(advance_winner, args.match_id)
    print(format_bracket(bracket))


def cmd_show(args):
    print(format_bracket(BracketStore(args.file).load()))


def build_parser():
    parser = argparse.ArgumentParser(description='Run a single elimination bracket')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    subparsers = parser.add_subparsers(dest='command', required=True)

    generate = subparsers.add_parser('generate', help='Generate a bracket from a tournament file')
    generate.add_argument('config', help='Tournament YAML file with entrants')
    generate.add_argument('--out', help='Bracket file to write (default: <data dir>/<name>.yaml)')
    generate.add_argument('--draw-size', type=int, help='Override the draw size')
    generate.add_argument('--seed-count', type=int, help='Override the seed count')
    generate.add_argument('--force', action='store_true',
                          help='Replace an existing bracket file, discarding its results')
    generate.set_defaults(func=cmd_generate)

    result = subparsers.add_parser('result', help='Record a match result')
    result.add_argument('file', help='Bracket YAML file')
    result.add_argument('match_id', help='Match id, e.g. R1-M2')
    result.add_argument('score_a')
    result.add_argument('score_b')
    result.set_defaults(func=cmd_result)

    advance = subparsers.add_parser('advance', help='Move a held winner into the next round')
    advance.add_argument('file', help='Bracket YAML file')
    advance.add_argument('match_id', help='Match id, e.g. R2-M1')
    advance.set_defaults(func=cmd_advance)

    show = subparsers.add_parser('show', help='Print a bracket')
    show.add_argument('file', help='Bracket YAML file')
    show.set_defaults(func=cmd_show)
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )
    try:
        args.func(args)
    except BracketError as e:
        logger.debug(f'{args.command} rejected: {e}')
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
