"""CLI main loop: menu dispatch and error reporting."""

import logging
import sys

from scripts.cli import config as cli_config
from scripts.cli.menu import print_menu
from scripts.cli.setup import full_setup
from scripts.cli.views import (
    create_product,
    delete_product,
    export_json,
    export_xml,
    import_xml,
    load_csv,
    modify_product,
    record_entry,
    record_exit,
    show_date_range,
    show_history,
    show_products,
    show_stock_by_category,
    show_top_sellers,
)

HANDLERS = {
    "1": create_product,
    "2": show_products,
    "3": modify_product,
    "4": delete_product,
    "5": load_csv,
    "6": record_entry,
    "7": record_exit,
    "8": show_history,
    "9": export_json,
    "10": export_xml,
    "11": import_xml,
    "12": show_date_range,
    "13": show_top_sellers,
    "14": show_stock_by_category,
}


class _FlushingFileHandler(logging.FileHandler):
    """FileHandler that flushes after every emit so interactive.log updates immediately."""

    def emit(self, record: logging.LogRecord) -> None:
        super().emit(record)
        self.flush()


def main(settings=None, log_path=None) -> int:
    from stock_kernel.exceptions import StockKernelError
    from stock_kernel.logging_config import (
        LogContext,
        configure_logging,
        get_logger,
        new_correlation_id,
    )

    if settings is None:
        settings = cli_config.resolve_settings()
    if log_path is None:
        cli_config.LOG_DIR.mkdir(parents=True, exist_ok=True)
        log_path = cli_config.LOG_PATH

    file_handler = _FlushingFileHandler(str(log_path), mode="a", delay=True)
    configure_logging(level=settings.log_level, handler=file_handler)
    logger = get_logger("cli")
    logger.info("interactive_cli_starting", extra={"log_path": str(log_path)})

    try:
        ctx = full_setup(settings)
    except Exception as exc:
        logger.error("interactive_cli_setup_failed", exc_info=True)
        print(f"  ERROR: {exc}", file=sys.stderr)
        return 1

    print(f"  Logging to: {log_path}", file=sys.stderr)

    while True:
        print_menu()
        try:
            choice = input("  Pick: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\n")
            break

        if choice == "0":
            print("\n  Goodbye.\n")
            break
        handler = HANDLERS.get(choice)
        if handler is None:
            print(f"\n  Unknown option '{choice}'. Pick 0-{len(HANDLERS)}.")
            continue

        try:
            with LogContext.bind(correlation_id=new_correlation_id(), command=handler.__name__):
                handler(ctx)
        except StockKernelError as exc:
            print(f"\n  ERROR: {exc}")
        except (ValueError, OSError) as exc:
            print(f"\n  ERROR: {exc}")
        except (EOFError, KeyboardInterrupt):
            print("\n  Cancelled.")

    logger.info("interactive_cli_stopped")
    return 0
