"""Entry point for textmask.

Usage:
    python -m textmask.main                          # demo window
    python -m textmask.main --mask '***-*******-**'  # demo window with a custom mask
    python -m textmask.main --type 12311999          # headless: type into the mask, print result
"""
import sys
import signal
import logging
import argparse


def setup_logging(debug: bool = False):
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _build_field(config, args):
    from textmask.field import MaskedField

    mask = args.mask if args.mask is not None else config.mask
    delimiters = args.delimiters if args.delimiters is not None else config.delimiters
    return MaskedField(
        mask,
        delimiters,
        policy=args.policy or config.placeholder_policy,
        notify_unchanged=config.notify_unchanged,
        style=config.style(),
    )


def run_headless(config, args, out=None):
    """Type args.type into the mask and report the resulting state."""
    out = out or sys.stdout
    logger = logging.getLogger(__name__)

    field = _build_field(config, args)
    field.on_complete_changed(lambda done: logger.debug("isCompleteChanged: %s", done))
    result = field.type_text(args.type, 0)

    styled = ''.join('_' if s.placeholder else s.char for s in field.styled())
    print(f"text:     {result.text}", file=out)
    print(f"cursor:   {result.cursor}", file=out)
    print(f"complete: {field.is_complete}", file=out)
    print(f"value:    {field.raw_value()}", file=out)
    print(f"styled:   {styled}", file=out)
    return 0 if field.is_complete else 1


def run_window(config, args):
    """Open a small window with one masked line edit."""
    from PyQt5.QtWidgets import QApplication, QFormLayout, QLabel, QWidget
    from textmask.widget import MaskedLineEdit

    app = QApplication(sys.argv)
    app.setApplicationName("textmask")

    mask = args.mask if args.mask is not None else config.mask
    delimiters = args.delimiters if args.delimiters is not None else config.delimiters

    window = QWidget()
    window.setWindowTitle("textmask — " + (mask or "(no mask)"))
    layout = QFormLayout(window)

    edit = MaskedLineEdit(
        mask, delimiters,
        policy=args.policy or config.placeholder_policy,
        style=config.style(),
        notify_unchanged=config.notify_unchanged,
    )
    status = QLabel()

    def _show(done: bool):
        status.setText("complete" if done else "incomplete")

    edit.isCompleteChanged.connect(_show)
    _show(edit.isComplete)
    layout.addRow("Input:", edit)
    layout.addRow("State:", status)

    window.show()
    return app.exec_()


def main(argv=None):
    signal.signal(signal.SIGINT, signal.SIG_DFL)

    parser = argparse.ArgumentParser(description="Masked text input")
    parser.add_argument("--mask", help="Mask template, e.g. '##/##/####'")
    parser.add_argument("--delimiters", help="Delimiter characters (empty string for none)")
    parser.add_argument("--policy", choices=("position", "value"),
                        help="How unfilled slots are detected")
    parser.add_argument("--type", metavar="TEXT",
                        help="Run headless: type TEXT into the mask and print the result")
    parser.add_argument("--debug", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    from textmask.config import Config

    config = Config()
    setup_logging(args.debug or config.debug_logging)

    if args.type is not None:
        return run_headless(config, args)
    return run_window(config, args)


if __name__ == "__main__":
    sys.exit(main())
