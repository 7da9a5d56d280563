"""hookclip command-line client with subcommands.

Usage:
    hookclip-cli analyze <youtube-url> [-q funny]
    hookclip-cli moments <analysis-id> [-q reaction]
    hookclip-cli clip <analysis-id> <index> [--aspect-ratio 9:16] [--resolution 720p] [--wait]
    hookclip-cli job <job-id>

All commands talk to a running hookclip server (``--server``, default
``settings.public_base_url``).
"""

import argparse
import asyncio
import logging
import sys
import time
from typing import Any

import httpx

from hookclip.config import settings
from hookclip.jobs.models import AspectRatio, Resolution

_TERMINAL_STATUSES = {"done", "failed"}


class CLIError(Exception):
    """Request failed; message is shown to the user."""


async def _request(
    client: httpx.AsyncClient,
    method: str,
    path: str,
    **kwargs: Any,
) -> Any:
    try:
        response = await client.request(method, path, **kwargs)
    except httpx.RequestError as e:
        raise CLIError(f"cannot reach hookclip server: {e}") from e
    if response.status_code >= 400:
        try:
            detail = response.json().get("detail", response.text)
        except ValueError:
            detail = response.text
        raise CLIError(f"{response.status_code}: {detail}")
    return response.json()


def _print_moments(moments: list[dict[str, Any]]) -> None:
    if not moments:
        print("  (no matching moments)")
        return
    for i, m in enumerate(moments):
        tags = ", ".join(m["tags"]) or "-"
        print(
            f"  [{i}] {m['start_label']}-{m['end_label']}  hook {m['score']:>3}  "
            f"{m['label']}  (tags: {tags})"
        )


def _print_job(job: dict[str, Any]) -> None:
    print(f"Job {job['job_id']}")
    print(f"  status:  {job['status']}")
    print(f"  moment:  {job['moment']['label']} ({job['moment']['start_label']}-{job['moment']['end_label']})")
    print(f"  options: {job['aspect_ratio']} @ {job['resolution']}")
    if job.get("result_ref"):
        print(f"  result:  {job['result_ref']}")
    if job.get("error"):
        print(f"  error:   {job['error']['reason']} {job['error']['message']}".rstrip())


# --- Subcommands ---


async def cmd_analyze(args: argparse.Namespace, client: httpx.AsyncClient) -> None:
    """Analyze a video and list its moments."""
    print(f"Analyzing: {args.url}")
    data = await _request(client, "POST", "/api/v1/analyses", json={"url": args.url})
    print(f"\n{data['title']} ({data['channel']}, {data['duration']})")
    print(f"  analysis id: {data['analysis_id']}")
    print(f"  score: {data['overall_score']} - {data['explanation']}")
    if data["hooks"]:
        print("  hooks:")
        for hook in data["hooks"]:
            print(f"    - {hook}")

    moments = data["moments"]
    if args.query:
        found = await _request(
            client,
            "GET",
            f"/api/v1/analyses/{data['analysis_id']}/moments",
            params={"q": args.query},
        )
        moments = found["moments"]
        print(f"  moments matching '{args.query}':")
    else:
        print("  moments:")
    _print_moments(moments)


async def cmd_moments(args: argparse.Namespace, client: httpx.AsyncClient) -> None:
    """Search the moments of a stored analysis."""
    data = await _request(
        client,
        "GET",
        f"/api/v1/analyses/{args.analysis_id}/moments",
        params={"q": args.query or ""},
    )
    print(f"{data['count']} moment(s) in {data['analysis_id']}")
    _print_moments(data["moments"])


async def cmd_clip(args: argparse.Namespace, client: httpx.AsyncClient) -> None:
    """Request a clip for one moment of a stored analysis."""
    analysis = await _request(client, "GET", f"/api/v1/analyses/{args.analysis_id}")
    moments = analysis["moments"]
    if not 0 <= args.index < len(moments):
        raise CLIError(f"moment index {args.index} out of range (0-{len(moments) - 1})")
    m = moments[args.index]

    body = {
        "moment": {k: m[k] for k in ("label", "start", "end", "score", "tags")},
        "aspect_ratio": args.aspect_ratio,
        "resolution": args.resolution,
    }
    job = await _request(client, "POST", "/api/v1/jobs", json=body)
    _print_job(job)

    if not args.wait:
        return

    deadline = time.monotonic() + args.max_wait
    while job["status"] not in _TERMINAL_STATUSES:
        if time.monotonic() >= deadline:
            raise CLIError(f"gave up waiting for job {job['job_id']} after {args.max_wait:.0f}s")
        await asyncio.sleep(args.poll_interval)
        job = await _request(client, "GET", f"/api/v1/jobs/{job['job_id']}")
        print(f"  ... {job['status']}")
    print()
    _print_job(job)
    if job["status"] == "failed":
        raise CLIError("clip job failed")


async def cmd_job(args: argparse.Namespace, client: httpx.AsyncClient) -> None:
    """Show the current state of a job."""
    job = await _request(client, "GET", f"/api/v1/jobs/{args.job_id}")
    _print_job(job)


_COMMANDS = {
    "analyze": cmd_analyze,
    "moments": cmd_moments,
    "clip": cmd_clip,
    "job": cmd_job,
}


async def _run(args: argparse.Namespace) -> None:
    async with httpx.AsyncClient(base_url=args.server, timeout=args.timeout) as client:
        await _COMMANDS[args.command](args, client)


# --- Main CLI ---


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hookclip-cli",
        description="hookclip - find viral moments and cut clips",
    )
    parser.add_argument("--server", default=settings.public_base_url, help="hookclip server URL")
    parser.add_argument("--timeout", type=float, default=150.0, help="HTTP timeout in seconds")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    subparsers = parser.add_subparsers(dest="command", help="available commands")

    # --- analyze ---
    p_analyze = subparsers.add_parser("analyze", help="analyze a YouTube video")
    p_analyze.add_argument("url", help="YouTube link")
    p_analyze.add_argument("-q", "--query", help="only show moments matching text or tag")

    # --- moments ---
    p_moments = subparsers.add_parser("moments", help="search moments of an analysis")
    p_moments.add_argument("analysis_id", help="analysis id")
    p_moments.add_argument("-q", "--query", help="text or tag (e.g. funny, sad, reaction)")

    # --- clip ---
    p_clip = subparsers.add_parser("clip", help="request a clip for a moment")
    p_clip.add_argument("analysis_id", help="analysis id")
    p_clip.add_argument("index", type=int, help="moment index as listed by analyze")
    p_clip.add_argument(
        "--aspect-ratio",
        choices=[a.value for a in AspectRatio],
        default=AspectRatio.LANDSCAPE.value,
        help="frame shape (default: 16:9)",
    )
    p_clip.add_argument(
        "--resolution",
        choices=[r.value for r in Resolution],
        default=Resolution.P1080.value,
        help="output resolution (default: 1080p)",
    )
    p_clip.add_argument("--wait", action="store_true", help="poll until the job finishes")
    p_clip.add_argument("--poll-interval", type=float, default=1.0, help="seconds between polls")
    p_clip.add_argument("--max-wait", type=float, default=900.0, help="give up after N seconds")

    # --- job ---
    p_job = subparsers.add_parser("job", help="show a clip job")
    p_job.add_argument("job_id", help="job id")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        asyncio.run(_run(args))
    except CLIError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
