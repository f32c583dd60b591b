"""
Exorcism CLI - Command-line interface for the engine.

Usage:
    exorcism board --seed N                  Print the board for a seed
    exorcism hint --seed N                   List valid selections on a fresh board
    exorcism simulate --seed N [--policy P]  Let a bot play a round, print its session
    exorcism verify <session_file>           Replay-verify a recorded session
    exorcism serve                           Run the REST API
"""

import argparse
import logging
import os
import sys


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Ten Exorcism - Deterministic puzzle engine",
        prog="exorcism",
    )
    parser.add_argument("--log-level", default=os.getenv("EXORCISM_LOG_LEVEL", "INFO"))
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Board command
    board_parser = subparsers.add_parser("board", help="Print the board for a seed")
    board_parser.add_argument("--seed", type=int, required=True, help="Board seed")

    # Hint command
    hint_parser = subparsers.add_parser("hint", help="List valid selections for a seed")
    hint_parser.add_argument("--seed", type=int, required=True, help="Board seed")
    hint_parser.add_argument("--limit", type=int, default=10, help="Maximum selections to list")

    # Simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Let a bot play a round")
    simulate_parser.add_argument("--seed", type=int, help="Board seed (random if omitted)")
    simulate_parser.add_argument(
        "--policy", choices=["greedy", "random", "first"], default="greedy",
        help="Bot policy",
    )
    simulate_parser.add_argument("--bot-seed", type=int, help="Seed for the random policy")
    simulate_parser.add_argument("--output", "-o", help="Write the session JSON to a file")

    # Verify command
    verify_parser = subparsers.add_parser("verify", help="Replay-verify a session")
    verify_parser.add_argument("session_file", help="Path to session JSON")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the REST API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "board":
        return cmd_board(args)
    elif args.command == "hint":
        return cmd_hint(args)
    elif args.command == "simulate":
        return cmd_simulate(args)
    elif args.command == "verify":
        return cmd_verify(args)
    elif args.command == "serve":
        return cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_board(args):
    """Print the board for a seed."""
    from .engine_core import create_board_from_seed, has_valid_moves

    board = create_board_from_seed(args.seed)
    print(f"Seed: {args.seed}")
    print(board)
    print(f"Valid moves available: {'yes' if has_valid_moves(board) else 'no'}")


def cmd_hint(args):
    """List valid selections on the board for a seed."""
    from .engine_core import create_board_from_seed, find_valid_moves, count_non_null_cells

    board = create_board_from_seed(args.seed)
    moves = find_valid_moves(board, limit=args.limit)
    if not moves:
        print("No valid selections")
        return

    for selection in moves:
        r1, c1, r2, c2 = selection.as_tuple()
        print(f"({r1}, {c1}) -> ({r2}, {c2}): {count_non_null_cells(board, selection)} ghost(s)")


def cmd_simulate(args):
    """Let a bot play a full round and print the finalized session."""
    from .bots import POLICIES, RandomPolicy, autoplay
    from .session import GameLoop, EndReason
    from .api.schemas import GameSessionRecord

    if args.policy == "random":
        policy = RandomPolicy(seed=args.bot_seed)
    else:
        policy = POLICIES[args.policy]()

    loop = GameLoop(seed=args.seed)
    loop.start()
    autoplay(loop, policy)
    session = loop.finish(EndReason.NO_MOVES)

    payload = GameSessionRecord.from_session(session).model_dump_json(by_alias=True, indent=2)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(payload)
        print(f"Session written to {args.output}")
    else:
        print(payload)

    print(f"Seed {session.board_seed}: score {session.final_score} "
          f"in {session.action_count} move(s)", file=sys.stderr)


def cmd_verify(args):
    """Replay-verify a recorded session file."""
    from pydantic import ValidationError
    from .api.schemas import GameSessionRecord
    from .session import replay_report

    try:
        with open(args.session_file, "r", encoding="utf-8") as f:
            record = GameSessionRecord.model_validate_json(f.read())
    except FileNotFoundError:
        print(f"Error: File not found: {args.session_file}")
        sys.exit(1)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: Cannot read {args.session_file}: {e}")
        sys.exit(1)
    except ValidationError as e:
        print(f"Error: Invalid session file: {e}")
        sys.exit(1)

    report = replay_report(record.to_session())
    print(f"Session: {report.session_id}")
    print(f"Complete: {report.is_complete}")
    print(f"Claimed score: {report.claimed_score}")
    print(f"Replayed score: {report.replayed_score}")

    if report.mismatches:
        print("\nMismatched actions:")
        for m in report.mismatches:
            print(f"  - #{m.index}: logged {m.logged_result.value} (+{m.logged_score}), "
                  f"replayed {m.replayed_result.value} (+{m.replayed_score})")

    if report.verified:
        print("\nVERIFIED")
    else:
        print("\nREJECTED")
        sys.exit(1)


def cmd_serve(args):
    """Run the REST API with uvicorn."""
    try:
        import uvicorn
    except ImportError:
        print("Error: uvicorn not installed. Install with: pip install uvicorn")
        sys.exit(1)

    from .api import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port)


if __name__ == "__main__":
    main()
