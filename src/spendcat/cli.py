"""Summary: Command-line interface for SpendCat.

Importance: Provides a local entry point for predicting, training and inspecting the model.
Alternatives: Use the HTTP API for every workflow.
"""

from __future__ import annotations

import argparse
import logging

from spendcat.app import build_services
from spendcat.config import AppConfig


def build_parser() -> argparse.ArgumentParser:
    """Summary: Build the CLI argument parser.

    Importance: Defines supported commands for local operation.
    Alternatives: Use a CLI framework like Typer or Click.
    """

    parser = argparse.ArgumentParser(description="SpendCat CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    predict = subparsers.add_parser("predict", help="Suggest a category for a description")
    predict.add_argument("text", type=str)
    predict.add_argument("--merchant", type=str, default=None)

    train = subparsers.add_parser("train", help="Train on a confirmed category")
    train.add_argument("transaction_id", type=str)
    train.add_argument("text", type=str)
    train.add_argument("category", type=str)
    train.add_argument("--merchant", type=str, default=None)
    train.add_argument("--weight", type=float, default=1)

    subparsers.add_parser("stats", help="Show model statistics")

    list_examples = subparsers.add_parser("list-examples", help="List recent training examples")
    list_examples.add_argument("--limit", type=int, default=20)

    subparsers.add_parser("reset-model", help="Forget all learned counters")
    subparsers.add_parser("show-lexicon", help="Print the rule lexicon")

    return parser


def run_cli(argv: list[str] | None = None) -> None:
    """Summary: Execute CLI commands based on arguments.

    Importance: Drives local workflows without running the API server.
    Alternatives: Invoke services via an HTTP API.
    """

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    parser = build_parser()
    args = parser.parse_args(argv)
    config = AppConfig.from_env()
    services = build_services(config)

    if args.command == "predict":
        result = services.categorization.classify(args.text, args.merchant)
        if result.category is None:
            print(f"No suggestion (confidence {result.confidence:.3f}).")
        else:
            print(f"{result.category} ({result.confidence:.3f}, {result.source})")
        for reason in result.reasons:
            print(f"  {reason}")
        return

    if args.command == "train":
        example_id = services.categorization.train(
            args.transaction_id,
            args.category,
            note=args.text,
            merchant=args.merchant,
            weight=args.weight,
        )
        if example_id is None:
            print("Nothing to train on.")
        else:
            print(f"Recorded training example {example_id}.")
        return

    if args.command == "stats":
        snapshot = services.model.snapshot()
        for key, value in snapshot.items():
            if key == "category_totals":
                continue
            print(f"{key}: {value}")
        for row in snapshot["category_totals"]:
            print(f"  {row['category']}: {row['doc_count']} docs, {row['total_words']} words")
        return

    if args.command == "list-examples":
        for example in services.model.list_training_examples(args.limit):
            print(f"{example.created_at} {example.transaction_id} [{example.category}] {example.text}")
        return

    if args.command == "reset-model":
        services.model.reset_model()
        print("Model reset.")
        return

    if args.command == "show-lexicon":
        for category, keywords in services.lexicon.as_dict().items():
            print(f"{category}: {', '.join(keywords)}")
        return


if __name__ == "__main__":
    run_cli()
