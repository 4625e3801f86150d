"""Command-line argument parser for the uploader."""

from cli.models import UploadCommand


class ParseError(Exception):
    """Raised when command-line parsing fails."""

    pass


def parse_args(argv: list[str]) -> UploadCommand:
    """Parse program arguments into an UploadCommand.

    Accepted form: ``[--debug] [--pause] [--config PATH] <file-path>``

    Args:
        argv: Arguments without the program name

    Returns:
        UploadCommand

    Raises:
        ParseError: If the file path is missing or an option is malformed
    """
    debug = False
    pause = False
    config_path = None
    positional = []

    args = iter(argv)
    for arg in args:
        if arg == "--debug":
            debug = True
        elif arg == "--pause":
            pause = True
        elif arg == "--config":
            config_path = next(args, None)
            if not config_path:
                raise ParseError("--config requires a path")
        elif arg.startswith("--config="):
            config_path = arg.split("=", 1)[1]
            if not config_path:
                raise ParseError("--config requires a path")
        elif arg == "--":
            positional.extend(args)
        elif arg.startswith("--"):
            raise ParseError(f"Unknown option: {arg}")
        else:
            positional.append(arg)

    if not positional or not positional[0].strip():
        raise ParseError("A file path is required")
    if len(positional) > 1:
        raise ParseError(f"Expected one file path, got {len(positional)}")

    return UploadCommand(
        file_path=positional[0],
        config_path=config_path,
        debug=debug,
        pause=pause,
    )
