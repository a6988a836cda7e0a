import argparse
import time
from typing import Optional

from colorama import Fore, Style

import mqclient
from mqclient import MQClient, Topic, NoMessageAvailable, CommunicationError


class Const:
    POLL_INTERVAL = 1.0
    ERROR_BACKOFF = 5.0


class TopicWatcher:
    """Subscribes to a topic and prints every message received until interrupted."""

    def __init__(self, config_path: str = "examples/config.yaml") -> None:
        config = mqclient.load_config(config_path)
        self.logger = mqclient.setup_logging(config.log_level, config.log_file)
        self.client: MQClient = config.create_client(logger=self.logger)

    def run(self, topic: Topic, interval: float = Const.POLL_INTERVAL) -> int:
        if not self.client.subscribe(topic):
            print(Fore.RED + f"Broker refused subscription to '{topic}'" + Style.RESET_ALL)
            return 1
        print(f"Watching '{topic}' on {self.client.host}:{self.client.port}, Ctrl+C to stop")
        try:
            while True:
                delay = interval
                try:
                    message = self.client.receive(topic)
                    ts = time.strftime("%H:%M:%S")
                    print(Fore.CYAN + f"[{ts}] " + Style.RESET_ALL + message.content)
                    delay = 0  # drain the queue before sleeping again
                except NoMessageAvailable:
                    pass
                except CommunicationError as e:
                    self.logger.warning(f"Broker unavailable, retrying in {Const.ERROR_BACKOFF}s: {e}")
                    delay = Const.ERROR_BACKOFF
                if delay:
                    time.sleep(delay)
        finally:
            try:
                self.client.unsubscribe(topic)
            except CommunicationError as e:
                self.logger.error(f"Failed to unsubscribe from '{topic}': {e}")


def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Print messages arriving on a topic")
    ap.add_argument("topic")
    ap.add_argument("--config", default="examples/config.yaml", help="YAML configuration file")
    ap.add_argument("--interval", type=float, default=Const.POLL_INTERVAL, help="Seconds between polls")
    args = ap.parse_args(argv)
    watcher = TopicWatcher(args.config)
    return watcher.run(Topic(args.topic), args.interval)


if __name__ == "__main__":
    mqclient.run_with_keyboard_interrupt(main)
