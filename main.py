"""
GrowDash - plant cultivation monitoring backend

`serve` polls the sensor relay and keeps operator notifications current.
`analyze` runs the AI photo analysis for one plant photo.
"""

import argparse
import asyncio
import json
import logging
import signal
import sys
from pathlib import Path

from growdash.controllers import GeminiClient, decode_data_url
from growdash.core import DashboardServer
from growdash.exceptions import AnalysisError, ParseError
from growdash.services import AnalysisService, DiagnosticsService
from growdash.utils.logger import setup_logging

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)


async def serve():
    """Run the dashboard server until SIGINT/SIGTERM"""
    server = DashboardServer()

    # Handle shutdown signals
    def signal_handler(sig, frame):
        logger.info(f"Received signal {sig}")
        asyncio.create_task(server.stop())

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        await server.start()
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        raise
    finally:
        await server.stop()


def load_photo(photo_path: Path) -> bytes:
    """Photo bytes from an image file or a file holding a base64 data URL"""
    raw = photo_path.read_bytes()
    if raw.startswith(b"data:"):
        return decode_data_url(raw.decode("ascii", errors="replace").strip())
    return raw


async def analyze(photo_path: Path, as_json: bool = False) -> int:
    """Analyze one photo and print the result"""
    try:
        photo = load_photo(photo_path)
    except ParseError as e:
        print(f"Could not read photo: {e}", file=sys.stderr)
        return 1
    service = AnalysisService(GeminiClient(), diagnostics=DiagnosticsService())

    try:
        outcome = await service.analyze(photo)
    except AnalysisError as e:
        print(f"Analysis failed. Check the API key or network connection. ({e})", file=sys.stderr)
        return 1

    if outcome.silhouette is not None:
        suffix = ".png" if outcome.silhouette.mime_type == "image/png" else ".img"
        silhouette_path = photo_path.with_name(f"{photo_path.stem}_silhouette{suffix}")
        silhouette_path.write_bytes(outcome.silhouette.data)
        logger.info(f"Silhouette saved to {silhouette_path}")

    if as_json:
        print(json.dumps(outcome.to_dict(), ensure_ascii=False, indent=2))
        return 0

    result = outcome.result
    print(f"Plant: {result.plant_name} ({result.metrics.growth_stage})")
    print(f"Health: {result.metrics.health_score:g} [{outcome.health_tier}]")
    for subject, value, full_mark in outcome.radar_points():
        print(f"  {subject:<8} {value:6.1f} / {full_mark:g}")
    if result.metrics.detected_anomalies:
        print("Anomalies: " + ", ".join(result.metrics.detected_anomalies))
    print(f"Silhouette: {result.silhouette_description}")
    for tip in result.recommendations:
        print(f"  - {tip}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="growdash", description=__doc__.strip().splitlines()[0])
    sub = parser.add_subparsers(dest="command")
    sub.add_parser("serve", help="poll sensors and derive notifications")
    analyze_parser = sub.add_parser("analyze", help="analyze a plant photo")
    analyze_parser.add_argument("photo", type=Path)
    analyze_parser.add_argument("--json", action="store_true", help="print the result as JSON")
    return parser


def main(argv=None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)

    if args.command == "analyze":
        return asyncio.run(analyze(args.photo, as_json=args.json))

    asyncio.run(serve())
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception as e:
        logger.error(f"Server crashed: {e}", exc_info=True)
        sys.exit(1)
