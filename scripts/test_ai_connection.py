"""Check ANTHROPIC_API_KEY and make one tiny model call."""

import asyncio
import os
import sys

# Add parent directory to path so we can import trainer_aide
sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from trainer_aide.core.config import get_settings
from trainer_aide.core.logging_config import configure_logging
from trainer_aide.services.anthropic_client import ClaudeClient, validate_api_key


async def main() -> int:
    settings = get_settings()
    configure_logging(settings.log_level)
    valid, error = validate_api_key(settings.anthropic_api_key)
    if not valid:
        print(f"API key invalid: {error}")
        return 1
    print(f"Calling {settings.ai_model}...")
    ok, error = await ClaudeClient(settings).test_connection()
    if not ok:
        print(f"Connection failed: {error}")
        return 1
    print("API connection successful")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
