#!/usr/bin/env python3
"""
mqclient console tool.

Runs a single broker operation from the command line:

    mqclient --host 127.0.0.1 --port 5000 publish orders "hello"
    mqclient --config config.yaml receive orders
"""

import argparse
import uuid
from typing import Optional, Sequence

from colorama import Fore, Style, just_fix_windows_console

from .api import MQClient, Topic, Message
from .config import BrokerConfig, load_config
from .exceptions import ValidationError, ConfigurationError, CommunicationError, NoMessageAvailable
from .utils import setup_logging, call_with_keyboard_interrupt


class ExitCode:
    OK = 0
    DECLINED = 1
    USAGE = 2
    COMMUNICATION = 3


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="mqclient", description="Send one request to a message-queue broker")
    ap.add_argument("--config", "-c", help="YAML configuration file")
    ap.add_argument("--host", help="Broker host (overrides config)")
    ap.add_argument("--port", type=int, help="Broker port (overrides config)")
    ap.add_argument("--app-id", type=uuid.UUID, help="Application UUID (default: from config, else random)")
    ap.add_argument("--timeout", type=float, help="Socket timeout in seconds (default: transport default)")
    ap.add_argument("--log-level", "-l", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                    help="Console logging level (default: from config, else WARNING)")
    ap.add_argument("--trace", action="store_true", help="Print raw request and response traffic")

    sub = ap.add_subparsers(dest="action", required=True)
    for name in ("subscribe", "unsubscribe", "receive"):
        p = sub.add_parser(name, help=f"{name.capitalize()} a topic")
        p.add_argument("topic")
    p = sub.add_parser("publish", help="Publish a message to a topic")
    p.add_argument("topic")
    p.add_argument("content")
    return ap


def resolve_config(args: argparse.Namespace) -> BrokerConfig:
    """Merge the config file (if any) with command-line overrides"""
    if args.config:
        config = load_config(args.config)
    else:
        if args.host is None or args.port is None:
            raise ConfigurationError("Broker host and port are required (use --host/--port or --config)")
        config = BrokerConfig(host=args.host, port=args.port, log_level="WARNING")

    if args.host is not None:
        config.host = args.host
    if args.port is not None:
        config.port = args.port
    if args.app_id is not None:
        config.app_id = args.app_id
    if args.timeout is not None:
        config.timeout = args.timeout
    if args.log_level is not None:
        config.log_level = args.log_level
    return config


def run(args: argparse.Namespace) -> int:
    try:
        config = resolve_config(args)
        logger = setup_logging(config.log_level, config.log_file)
        client: MQClient = config.create_client(logger=logger, print_traffic=args.trace)
        topic = Topic(args.topic)
        message = Message(args.content) if args.action == "publish" else None
    except (ConfigurationError, ValidationError) as e:
        print(Fore.RED + f"❌ {e}" + Style.RESET_ALL)
        return ExitCode.USAGE

    try:
        match args.action:
            case "receive":
                received = client.receive(topic)
                print(Fore.GREEN + f"✅ [{topic}] " + Style.RESET_ALL + received.content)
                return ExitCode.OK
            case "publish":
                ok = client.publish(message, topic)
            case "subscribe":
                ok = client.subscribe(topic)
            case "unsubscribe":
                ok = client.unsubscribe(topic)
            case _:
                raise ValueError(f"Unknown action '{args.action}'")
    except NoMessageAvailable as e:
        print(Fore.YELLOW + f"📭 {e}" + (f" ({e.broker_message})" if e.broker_message else "") + Style.RESET_ALL)
        return ExitCode.DECLINED
    except CommunicationError as e:
        print(Fore.RED + f"❌ {e}" + Style.RESET_ALL)
        return ExitCode.COMMUNICATION

    if ok:
        print(Fore.GREEN + f"✅ {args.action} '{topic}' accepted" + Style.RESET_ALL)
        return ExitCode.OK
    print(Fore.YELLOW + f"⚠️  {args.action} '{topic}' declined by broker" + Style.RESET_ALL)
    return ExitCode.DECLINED


def main(argv: Optional[Sequence[str]] = None) -> int:
    just_fix_windows_console()
    args = build_parser().parse_args(argv)
    return call_with_keyboard_interrupt(lambda: run(args))


if __name__ == "__main__":
    raise SystemExit(main())
