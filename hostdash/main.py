#!/usr/bin/env python3
"""
hostdash - single-host metrics dashboard

Flow:
- Configuration: YAML (-c/--config), then HOSTDASH_* environment (.env aware),
  then CLI overrides; resolved once here and passed down
- Serve mode (default): FastAPI app under uvicorn; the poller fetches
  GET {api_url}/api/metrics/{hostname} right away and every --interval seconds
- --once: fetch a single snapshot, print the detail table and exit
"""

import argparse
import asyncio
import logging

import uvicorn

from .api.metrics_client import MetricsApiClient
from .core.config import DashboardConfig, load_config
from .core.server import create_app
from .dashboard import DashboardController
from .tasks.poller import DashboardPoller

logger = logging.getLogger("hostdash.server")


def run_once(config: DashboardConfig) -> int:
    """Fetch one snapshot and print it. Returns the process exit code."""
    client = MetricsApiClient(
        config.api_url,
        config.api_key,
        timeout=config.request_timeout,
        verify_tls=config.verify_tls,
    )
    poller = DashboardPoller(config, client)
    asyncio.run(poller.fetch_snapshot())

    state = poller.state
    if state.error:
        print(f"Error: {state.error}")
        return 1

    controller = DashboardController()
    print(f"Metrics for {state.snapshot.hostname}")
    for row in controller.get_table_rows(state.snapshot):
        print(f"  {row['parameter']:<14} {row['value']}")
    return 0


def main():
    """Main entry point for hostdash."""
    parser = argparse.ArgumentParser(description="hostdash metrics dashboard")
    parser.add_argument("-c", "--config", help="Path to YAML config (default: $HOSTDASH_CONFIG or config.yaml)")
    parser.add_argument("--host", help="address to bind the dashboard to")
    parser.add_argument("--port", type=int, help="port to serve the dashboard on")
    parser.add_argument("--interval", type=float, help="seconds between metric fetches")
    parser.add_argument("--once", action="store_true",
                        help="fetch one snapshot, print it and exit")
    parser.add_argument("--log-level", dest="log_level",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="logging level")
    args = parser.parse_args()

    # configure logging first so config warnings are formatted; config log_level applied below
    logging.basicConfig(level=getattr(logging, args.log_level or "INFO"))

    try:
        config = load_config(args.config).override_with_args(args)
    except Exception as e:
        raise SystemExit(f"ERROR: failed to load configuration: {e}")

    logging.getLogger().setLevel(getattr(logging, config.log_level.upper(), logging.INFO))
    logger.info("hostdash starting: api=%s host=%s interval=%ss",
                config.api_url, config.hostname, config.interval)

    if args.once:
        raise SystemExit(run_once(config))

    app = create_app(config)
    try:
        uvicorn.run(app, host=config.host, port=config.port, access_log=False)
    except KeyboardInterrupt:
        print("\nInterrupted. Bye!")


if __name__ == "__main__":
    main()
