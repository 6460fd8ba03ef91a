import argparse
import asyncio
import sys
from typing import List, Optional

from evm_testkit.config import Config
from evm_testkit.core.context import ChainContext
from evm_testkit.helpers import get_current_blocktime, increase_time, mine_one_block
from evm_testkit.logger import logger, setup_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="evm-testkit", description="Poke a running EVM test node"
    )
    parser.add_argument("--config", default=None, help="Path to the TOML config file")

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("mine", help="Mine one block")
    commands.add_parser("blocktime", help="Print the latest block timestamp")
    increase = commands.add_parser(
        "increase-time", help="Advance the node clock and mine a block"
    )
    increase.add_argument("seconds", type=int)
    return parser


async def run_command(args: argparse.Namespace) -> None:
    """
    Run one command against the configured node

    Args:
        args: Parsed command line arguments
    """
    config = Config(args.config)
    setup_logger(config.logging)
    async with ChainContext.from_config(config) as ctx:
        if args.command == "mine":
            await mine_one_block(ctx)
            logger.info("Mined one block")
        elif args.command == "blocktime":
            print(await get_current_blocktime(ctx))
        elif args.command == "increase-time":
            await increase_time(ctx, args.seconds)


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the command line interface"""
    args = build_parser().parse_args(argv)

    try:
        asyncio.run(run_command(args))
    except Exception as e:
        logger.critical(f"Command {args.command} failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
