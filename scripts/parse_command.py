"""Parse a spoken command transcript and print the resulting payload as JSON."""

import argparse
import json
import sys
from datetime import date
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from homestead_voice.parsing.models import ProjectContext
from homestead_voice.parsing.parser import parse_with_classification


def main() -> None:
    parser = argparse.ArgumentParser(description="Parse a voice command transcript")
    parser.add_argument("transcript", help="The recognised utterance, quoted")
    parser.add_argument("--project-id", help="ID of the project in view")
    parser.add_argument("--project-title", default="", help="Title of the project in view")
    parser.add_argument(
        "--today",
        type=date.fromisoformat,
        help="Resolve due dates relative to this YYYY-MM-DD date",
    )
    parser.add_argument(
        "--remote",
        action="store_true",
        help="Ask the running API (API_URL) instead of parsing locally",
    )
    args = parser.parse_args()

    if args.remote:
        from homestead_voice.api_client import check_health, parse_transcript

        if not check_health():
            print("API is not reachable; start it with: uvicorn homestead_voice.api.main:app")
            sys.exit(1)
        print(json.dumps(parse_transcript(args.transcript, args.project_id, args.project_title), indent=2))
        return

    context = ProjectContext(args.project_id, args.project_title) if args.project_id else None
    today = (lambda: args.today) if args.today else None
    classification, command = parse_with_classification(args.transcript, context, today)

    print(
        json.dumps(
            {
                "intent": command.intent.value,
                "rule": classification.rule,
                "command": command.to_record(),
            },
            indent=2,
        )
    )


if __name__ == "__main__":
    main()
