"""Emoji data pipeline - command line entry point."""
import argparse
import asyncio
import json
import sys
from typing import Any, Dict, Optional

import requests

from emoji_pipeline import EmojiSession
from emoji_pipeline.loader import read_json
from emoji_pipeline.utils import validate_config, ConfigError, setup_logging, get_logger

logger = get_logger(__name__)


def build_config(args: argparse.Namespace) -> Dict[str, Any]:
    """Translate CLI arguments into initialization options."""
    config: Dict[str, Any] = {}
    if args.data:
        config['data'] = lambda: read_json(args.data)
    if args.i18n:
        config['i18n'] = lambda: read_json(args.i18n)
    if args.emoji_version:
        config['emoji_version'] = args.emoji_version
    if args.set:
        config['set'] = args.set
    if args.locale:
        config['locale'] = args.locale
    if args.categories:
        config['categories'] = [c.strip() for c in args.categories.split(',') if c.strip()]
    if args.no_country_flags:
        config['no_country_flags'] = True
    return config


async def run_init(settings: Dict[str, Any], config: Dict[str, Any], output: Optional[str] = None) -> EmojiSession:
    """Run one initialization pass and report the result."""
    session = EmojiSession(settings)
    await session.init(config)
    data = session.data

    if output:
        with open(output, 'w', encoding='utf-8') as f:
            json.dump(data.to_dict(), f, ensure_ascii=False, indent=2)
        logger.info(f"✅ Wrote normalized dataset to {output}")
    else:
        for category in data.categories:
            print(f"{category.id}: {len(category.emojis)} emojis")
        print(f"emoticons: {len(data.emoticons)}, natives: {len(data.natives)}")

    return session


def main():
    """Entry point."""
    parser = argparse.ArgumentParser(description='Emoji Data Pipeline')
    parser.add_argument('--data', help='Local dataset JSON file. Default: fetch from CDN')
    parser.add_argument('--i18n', help='Local locale JSON file. Default: bundled English or CDN')
    parser.add_argument('--emoji-version', help='Emoji version of the dataset to fetch')
    parser.add_argument('--set', help='Emoji set: native, apple, facebook, google, twitter')
    parser.add_argument('--locale', help='Locale of the UI strings')
    parser.add_argument('--categories', help='Comma separated category ids to keep, in order')
    parser.add_argument('--no-country-flags', action='store_true', help='Hide country flags (native set only)')
    parser.add_argument('--output', help='Write the normalized dataset as JSON to this file')
    parser.add_argument('--log-level', help='Log level. Default: LOG_LEVEL or INFO')

    args = parser.parse_args()

    try:
        settings = validate_config()
        setup_logging(level=args.log_level or settings['log_level'], structured=False)

        logger.info("🚀 Initializing emoji data")
        asyncio.run(run_init(settings, build_config(args), args.output))

    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)
    except (requests.RequestException, OSError, ValueError) as e:
        logger.error(f"Loading emoji data failed: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
