# wasm_indexer/cli/__main__.py

"""
Wasm Indexer CLI Tool

Usage: python -m wasm_indexer.cli [command] [options]
"""

import json
from pathlib import Path

import click
import msgspec

from wasm_indexer import create_indexer
from wasm_indexer.core.config import IndexerConfig
from wasm_indexer.core.logging import IndexerLogger
from wasm_indexer.database.connection import DatabaseManager
from wasm_indexer.types import LoggingConfig, Tx, UnknownMsg, WasmIndexerError


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def cli(ctx, verbose):
    """Wasm Indexer CLI - index x/wasm records from transaction logs"""
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose

    IndexerLogger.configure(LoggingConfig(
        log_level="DEBUG" if verbose else "INFO",
        file_enabled=False,
        structured_format=verbose,
    ))


@cli.command('init-db')
def init_db():
    """Create the wasm tables"""
    config = IndexerConfig.from_env()
    db_manager = DatabaseManager(config.database)
    try:
        db_manager.initialize()
        db_manager.create_tables()
    finally:
        db_manager.shutdown()

    click.echo("✅ Wasm tables ready")


@cli.command('process-tx')
@click.argument('tx_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
def process_tx(tx_file: Path):
    """Index the wasm messages of a GetTxResponse JSON file"""
    with open(tx_file, 'r') as f:
        payload = json.load(f)

    try:
        tx = Tx.from_response(payload)
    except (ValueError, msgspec.ValidationError) as e:
        raise click.ClickException(f"Invalid transaction file: {e}")

    module = create_indexer()

    try:
        module.handle_tx(tx)
    except WasmIndexerError as e:
        raise click.ClickException(str(e))

    wasm_msgs = [m for m in tx.messages if not isinstance(m, UnknownMsg)]
    click.echo(f"✅ Processed {tx.txhash} at height {tx.height}: "
               f"{len(wasm_msgs)} wasm message(s) of {len(tx.messages)}")


@cli.command('params')
@click.argument('height', type=int)
def params(height: int):
    """Snapshot the x/wasm params at HEIGHT"""
    module = create_indexer()

    try:
        module.update_params(height)
    except WasmIndexerError as e:
        raise click.ClickException(str(e))

    click.echo(f"✅ Stored wasm params at height {height}")


def main():
    cli(obj={})


if __name__ == '__main__':
    main()
