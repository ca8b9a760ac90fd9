"""Example: extract text from a single image through the OCR channel."""

import argparse
import asyncio
import json

from ocr_bridge import PlatformChannelError, create_ocr_channel, create_service, load_config, setup_logging
from ocr_bridge.channel.ocr_handler import extract_text


async def run(image_path: str, config_path: str = None):
    config = load_config(config_path)
    setup_logging(config.get('logging'))
    service = create_service(config)
    channel = create_ocr_channel(service, name=config['channel']['name'])
    try:
        return await extract_text(channel, image_path)
    finally:
        service.close()


def main():
    """Extract text from an image and print it."""
    parser = argparse.ArgumentParser(description="Extract text from an image")
    parser.add_argument("image_path")
    parser.add_argument("--config", help="Path to config.yaml")
    args = parser.parse_args()

    print(f"Processing image: {args.image_path}")
    print("-" * 60)

    try:
        text = asyncio.run(run(args.image_path, args.config))
    except PlatformChannelError as e:
        print(json.dumps({'code': e.code, 'message': e.message, 'details': e.details}, indent=2))
        raise SystemExit(1)

    lines = text.split("\n") if text else []
    print(f"Recognized {len(lines)} lines")
    print(f"{'=' * 60}")
    print(text)


if __name__ == '__main__':
    main()
