"""Command line helpers for QuickData.

Provides CLI parsing, a `--dump` command that prints a store file's
snapshot (encrypted or plain), and the default action of serving the
HTTP API with uvicorn.
"""
from __future__ import annotations
import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import Iterable, Optional, TextIO

from quickdata_lib.config import Config, load_config
from quickdata_lib.logging_config import configure_logging
from quickdata_lib.main import create_app, create_store
from quickdata_lib.quickdata import ManualScheduler


def get_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="quickdata", description="QuickData store tools")
    p.add_argument("--config", type=Path, default=None, help="YAML settings file (default: data/config/quickdata.yml)")
    p.add_argument("--data-dir", default=None, help="Directory holding the QuickData/ folder")
    p.add_argument("--name", default=None, help="Store file name (default: DataInfo)")
    p.add_argument("--dump", action="store_true", help="Print the store snapshot and exit")
    p.add_argument("--decrypt", action="store_true", help="With --dump, print plain JSON instead of the encrypted text")
    p.add_argument("--host", default="127.0.0.1", help="Address to serve the HTTP API on")
    p.add_argument("--port", type=int, default=8000, help="Port to serve the HTTP API on")
    return p


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    parser = get_parser()
    if argv is not None:
        argv = list(argv)
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> Config:
    """Settings file values, then command line overrides."""
    cfg = load_config(args.config)
    if args.data_dir:
        cfg = replace(cfg, data_dir=args.data_dir)
    if args.name:
        cfg = replace(cfg, store_name=args.name)
    return cfg


def dump(config: Config, decrypt: bool = False, out: Optional[TextIO] = None) -> int:
    """Write the snapshot of the configured store to `out`.

    Returns 1 when the file could not be parsed (the printed snapshot is
    then the empty one), otherwise 0.
    """
    out = out or sys.stdout
    store = create_store(config, scheduler=ManualScheduler())
    out.write(store.get_all_info(decrypt))
    out.write("\n")
    return 0 if store.load_error is None else 1


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = parse_args(argv)
    config = build_config(args)
    if args.dump:
        configure_logging(args.config, level=config.log_level)
        return dump(config, args.decrypt)

    import uvicorn
    uvicorn.run(create_app(config), host=args.host, port=args.port)
    return 0
