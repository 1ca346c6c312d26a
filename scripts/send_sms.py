#!/usr/bin/env python3
"""
Send an SMS to your own Free Mobile phone.

Credentials come from FREESMS_USER / FREESMS_PASS (a .env file is loaded if
present). The message is taken from the command line or prompted for.

Usage:
    python scripts/send_sms.py "Backup finished"
"""

import asyncio
import sys
from pathlib import Path

# Add the src directory to the path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from freesms import DispatchError, FreeMobileClient, load_credentials  # noqa: E402
from freesms.logger_config import setup_logging  # noqa: E402
from freesms.utils.load_env import load_env  # noqa: E402


async def main():
    """Main function to send one message."""
    setup_logging(file_output=False)
    load_env()

    try:
        if len(sys.argv) > 1:
            message = " ".join(sys.argv[1:])
        else:
            message = input("Enter message to send: ")

        async with FreeMobileClient(load_credentials()) as client:
            result = await client.send(message)

        print(f"✅ Message sent in {result.chunk_count} SMS")
        if result.replaced_symbols:
            print(f"   {result.replaced_symbols} unsupported symbol(s) replaced")

    except KeyboardInterrupt:
        print("\n\n👋 Cancelled by user.")
        return 130
    except DispatchError as e:
        print(f"❌ {e.kind.value}: {e.message}")
        if e.delivered_chunks:
            print(f"   {e.delivered_chunks}/{e.total_chunks} SMS were already delivered")
        return 1

    return 0


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
