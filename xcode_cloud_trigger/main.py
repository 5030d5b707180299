import argparse
import asyncio
import json
import sys
from typing import Optional, Sequence

from dotenv import load_dotenv

from xcode_cloud_trigger.core.config import Settings
from xcode_cloud_trigger.exceptions import AppStoreConnectException
from xcode_cloud_trigger.services.build_trigger import BuildTriggerService
from xcode_cloud_trigger.utils.logging import LoggingApiEventSink, configure_logging

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xcode-cloud-trigger",
        description="Trigger an Xcode Cloud build for a workflow on a git branch.",
    )
    parser.add_argument(
        "--appstore-connect-token",
        default=settings.APPSTORE_CONNECT_TOKEN,
        help="App Store Connect API token (env: APPSTORE_CONNECT_TOKEN)",
    )
    parser.add_argument(
        "--xcode-cloud-workflow-id",
        default=settings.XCODE_CLOUD_WORKFLOW_ID,
        help="Xcode Cloud workflow id (env: XCODE_CLOUD_WORKFLOW_ID)",
    )
    parser.add_argument(
        "--git-branch-name",
        default=settings.GIT_BRANCH_NAME,
        help="Branch to build (env: GIT_BRANCH_NAME)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=settings.LOG_ENABLED,
        help="Enable log output (env: LOG_ENABLED)",
    )
    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=LOG_LEVELS,
        type=str.upper,
        help="Minimum log level when logging is enabled (env: LOG_LEVEL)",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_dotenv()
    settings = Settings()
    parser = build_parser(settings)
    args = parser.parse_args(argv)

    # argparse does not check choices against defaults taken from the environment
    if args.log_level not in LOG_LEVELS:
        parser.error(
            f"invalid log level {args.log_level!r} (choose from {', '.join(LOG_LEVELS)})"
        )

    configure_logging(enabled=args.verbose, level=args.log_level)

    params = {
        "appstore-connect-token": args.appstore_connect_token,
        "xcode-cloud-workflow-id": args.xcode_cloud_workflow_id,
        "git-branch-name": args.git_branch_name,
    }
    service = BuildTriggerService(
        event_sink=LoggingApiEventSink() if args.verbose else None,
        base_url=settings.APP_STORE_CONNECT_BASE_URL,
    )

    try:
        result = asyncio.run(service.trigger(params))
    except AppStoreConnectException as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(result.model_dump(by_alias=True)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
