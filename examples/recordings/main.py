#!/usr/bin/env python3
"""Example CLI for managing OpenVidu recordings.

Usage:
    # Point the client at your server
    export OPENVIDU_DOMAIN="https://openvidu.example.com"
    export OPENVIDU_PORT=4443
    export OPENVIDU_SECRET="MY_SECRET"

    # List recordings
    uv run python examples/recordings/main.py list

    # Start / stop recording a session
    uv run python examples/recordings/main.py start <session_id> --name meeting --resolution 1280x720
    uv run python examples/recordings/main.py stop <recording_id>

    # Get, download or delete a recording
    uv run python examples/recordings/main.py get <recording_id>
    uv run python examples/recordings/main.py download <recording_id> --output meeting.mp4
    uv run python examples/recordings/main.py delete <recording_id>
"""

import argparse
import asyncio
import dataclasses
import logging
import sys
from pathlib import Path

import aiohttp

from openvidu import ClientConfig, OpenVidu, OpenViduError, Recording, RecordingLayout, RecordingProperties


def _status(recording: Recording) -> str:
    return getattr(recording.status, "value", recording.status)


def print_recording(recording: Recording) -> None:
    print(f"\nRecording: {recording.id}")
    print("-" * 50)
    print(f"Session: {recording.session_id}")
    print(f"Status: {_status(recording)}")
    if recording.duration:
        print(f"Duration: {recording.duration:.1f} seconds")
    if recording.size:
        print(f"Size: {recording.size:,} bytes")
    if recording.url:
        print(f"URL: {recording.url}")


async def list_recordings(client: OpenVidu) -> None:
    """List recordings."""
    print("Fetching recordings...")
    recordings = await client.get_recordings()

    if not recordings:
        print("No recordings found.")
        return

    print(f"\nFound {len(recordings)} recordings:\n")
    print(f"{'Recording ID':<30} {'Session':<30} {'Status':<10} {'Duration':<10}")
    print("-" * 82)

    for rec in recordings:
        status = _status(rec)
        duration = f"{rec.duration:.1f}s" if rec.duration else "N/A"
        print(f"{rec.id:<30} {rec.session_id:<30} {status:<10} {duration:<10}")


async def start_recording(client: OpenVidu, session_id: str, name: str | None, resolution: str | None) -> None:
    """Start recording a session."""
    properties = RecordingProperties(name=name, resolution=resolution, recording_layout=RecordingLayout.BEST_FIT)
    recording = await client.start_recording(session_id, properties)
    print_recording(recording)


async def download_recording(client: OpenVidu, recording_id: str, output: str) -> None:
    """Download a recording file."""
    recording = await client.get_recording(recording_id)

    if not recording.url:
        print(f"Error: Recording {recording_id} is not ready yet")
        sys.exit(1)

    output_path = Path(output)
    print(f"Downloading {recording_id} to {output_path}...")

    config = client.config
    async with (
        aiohttp.ClientSession(auth=aiohttp.BasicAuth(config.app, config.secret)) as session,
        session.get(recording.url, ssl=config.verify_ssl) as response,
    ):
        if not response.ok:
            print(f"Error: Failed to download: {response.status} {response.reason}")
            sys.exit(1)

        total_size = int(response.headers.get("content-length", 0))
        downloaded = 0

        with open(output_path, "wb") as f:
            async for chunk in response.content.iter_chunked(8192):
                f.write(chunk)
                downloaded += len(chunk)
                if total_size:
                    pct = (downloaded / total_size) * 100
                    print(f"\rDownloading: {pct:.1f}% ({downloaded:,} / {total_size:,} bytes)", end="")

    print(f"\nSaved to {output_path}")


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="OpenVidu Recordings CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s list                         List all recordings
  %(prog)s start <session_id>           Start recording a session
  %(prog)s stop <recording_id>          Stop a recording
  %(prog)s get <recording_id>           Get recording details
  %(prog)s download <recording_id>      Download recording file
  %(prog)s delete <recording_id>        Delete a recording
        """,
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    subparsers.add_parser("list", help="List recordings")

    start_parser = subparsers.add_parser("start", help="Start recording a session")
    start_parser.add_argument("session_id", help="Session to record")
    start_parser.add_argument("--name", help="Recording name")
    start_parser.add_argument("--resolution", help="WIDTHxHEIGHT of the recording")

    stop_parser = subparsers.add_parser("stop", help="Stop a recording")
    stop_parser.add_argument("recording_id", help="Recording to stop")

    get_parser = subparsers.add_parser("get", help="Get recording details")
    get_parser.add_argument("recording_id", help="Recording to get")

    download_parser = subparsers.add_parser("download", help="Download recording file")
    download_parser.add_argument("recording_id", help="Recording to download")
    download_parser.add_argument(
        "--output", "-o", default="recording.mp4", help="Output filename (default: recording.mp4)"
    )

    delete_parser = subparsers.add_parser("delete", help="Delete a recording")
    delete_parser.add_argument("recording_id", help="Recording to delete")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.debug:
        logging.basicConfig(level=logging.DEBUG)

    try:
        config = ClientConfig.from_env()
    except ValueError as e:
        print(f"Error: {e}. Set OPENVIDU_SECRET (and OPENVIDU_DOMAIN / OPENVIDU_PORT)")
        sys.exit(1)

    if args.debug:
        config = dataclasses.replace(config, debug=True)

    async with OpenVidu(config=config) as client:
        try:
            if args.command == "list":
                await list_recordings(client)
            elif args.command == "start":
                await start_recording(client, args.session_id, args.name, args.resolution)
            elif args.command == "stop":
                print_recording(await client.stop_recording(args.recording_id))
            elif args.command == "get":
                print_recording(await client.get_recording(args.recording_id))
            elif args.command == "download":
                await download_recording(client, args.recording_id, args.output)
            elif args.command == "delete":
                await client.delete_recording(args.recording_id)
                print(f"Deleted {args.recording_id}")
        except OpenViduError as e:
            print(f"Error: {e} (status {e.status_code})")
            sys.exit(1)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\nCancelled.")
