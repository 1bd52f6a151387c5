from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace

from ._version import __version__
from .config import ENV_KEYS, Config
from .exceptions import WebApiError
from .webapi import FORMATS, WebApiClient


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="steam-webapi")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument("--insecure", action="store_true", help="Use plain HTTP instead of HTTPS")
    p.add_argument("-v", "--verbose", action="store_true", help="Log requested URLs (key masked)")

    sub = p.add_subparsers(dest="cmd", required=False)

    p_config = sub.add_parser("config", help="Config commands")
    sub_config = p_config.add_subparsers(dest="config_cmd", required=True)

    sub_config.add_parser("keys", help="List the environment variables read")
    sub_config.add_parser("check", help="Validate the configuration from the environment")

    p_ifaces = sub.add_parser("interfaces", help="List the interfaces the Web API supports")
    p_ifaces.add_argument("--methods", action="store_true", help="Also list each method and version")

    p_call = sub.add_parser("call", help="Call a Web API method and print the response")
    p_call.add_argument("interface", help="Interface name (e.g. 'ISteamUser')")
    p_call.add_argument("method", help="Method name (e.g. 'GetPlayerSummaries')")
    p_call.add_argument("--api-version", dest="api_version", type=int, default=1, help="Method version")
    p_call.add_argument("--format", choices=FORMATS, default="json")
    p_call.add_argument(
        "--param",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Extra GET parameter (repeatable, order is kept)",
    )
    p_call.add_argument("--data", action="store_true", help="Check the result envelope and print 'result' only")

    return p


def parse_params(pairs: list[str]) -> dict[str, str]:
    params: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Invalid parameter (expected KEY=VALUE): {pair}")
        params[key] = value
    return params


def main(argv: list[str] | None = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)

    if args.version:
        print(__version__)
        return 0

    if args.cmd is None:
        p.print_help()
        return 0

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return _run(args)
    except (WebApiError, ValueError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1


def _run(args) -> int:
    cfg = Config.load_from_env()
    if args.insecure:
        cfg = replace(cfg, secure=False)

    if args.cmd == "config":
        if args.config_cmd == "keys":
            for k in ENV_KEYS:
                print(k)
            return 0

        if args.config_cmd == "check":
            # Intentionally do not print the key itself
            key_state = "set" if cfg.api_key else "not set"
            print(f"OK: api key {key_state}, secure={cfg.secure}, timeout={cfg.timeout_s}s")
            return 0

    client = WebApiClient(cfg)

    if args.cmd == "interfaces":
        for iface in client.list_interfaces():
            print(iface.name)
            if args.methods:
                for name in iface.method_names():
                    print(f"  {name}")
        return 0

    if args.cmd == "call":
        params = parse_params(args.param)
        if args.data:
            if args.format != "json":
                raise ValueError("--data requires --format json")
            result = client.get_json_data(args.interface, args.method, args.api_version, params)
            print(json.dumps(result, indent=2))
        else:
            print(client.load(args.format, args.interface, args.method, args.api_version, params))
        return 0

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
