"""CLI constants: colors, prompt style and user-facing text."""

from prompt_toolkit.styles import Style

STYLE = Style.from_dict(
    {
        "prompt": "#F45935 bold",
    }
)

GREEN = "\033[32m"
RED = "\033[31m"
RESET = "\033[0m"

PROGRAM_NAME = "filesharer-upload"

USAGE_TEXT = f"""Usage: {PROGRAM_NAME} [--debug] [--pause] [--config PATH] <file-path>

Uploads a file in parallel chunks and prints its download link.

Options:
  --config PATH   Settings file (default: $FILESHARER_CONFIG or ./appsettings.json)
  --pause         Wait for Enter before exiting
  --debug         Enable debug logging

Example:
  {PROGRAM_NAME} "/path/to/File.zip\""""

PAUSE_PROMPT = "\nPress Enter to close the window."
