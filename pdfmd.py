#!/usr/bin/env python3
"""
pdfmd: Converts a PDF into readable, structurally segmented text.

The default 'semantic' mode rebuilds reading order from positioned text runs
(columns, lines, paragraphs, headings, list items) and writes light Markdown.
The 'default', 'layout' and 'raw' modes pass pdftotext's linearized output
through, split per page.
"""

import argparse
import logging
import os
import sys

from rich.console import Console
from rich.markdown import Markdown

from core.log_utils import set_log_context, setup_logging
from pdfmd_lib.api import process_pdf_text
from pdfmd_lib.config import DEFAULT_CONFIG_PATH, ConfigService
from pdfmd_lib.constants import ENGINES, MODES, OUTPUT_FORMATS
from pdfmd_lib.renderer import render_markdown, render_summary, render_text
from pdfmd_lib.sources import ExtractionError

USAGE = "Usage: pdfmd.py [options] <input.pdf> [output_file]"


# --- CUSTOM ARGPARSE FORMATTER ---
class CustomHelpFormatter(
    argparse.ArgumentDefaultsHelpFormatter, argparse.RawTextHelpFormatter
):
    """
    A custom argparse formatter that combines showing default values with
    preserving newline formatting in help text.
    """

    pass


class Application:
    """Orchestrates the PDF to text workflow based on command-line arguments."""

    def __init__(self, args, console=None, err_console=None):
        self.args = args
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)

    def run(self) -> int:
        """Main entry point for the application logic. Returns an exit code."""
        setup_logging(
            project_name="pdfmd",
            level=logging.INFO if self.args.verbose else logging.WARNING,
            color_logs=self.args.color_logs,
            debug_topics=self.args.debug_topics,
            log_file=self.args.log_file,
        )

        pdf_path = self.args.pdf_file
        if not pdf_path:
            return self._fail(USAGE)
        if not pdf_path.lower().endswith(".pdf"):
            return self._fail(f"Input must be a PDF file. Received: {pdf_path}")
        if not os.path.exists(pdf_path):
            return self._fail(f"PDF not found: {pdf_path}")

        try:
            options = ConfigService(self.args.config).resolve(
                mode=self.args.mode,
                engine=self.args.engine,
                output_format=self.args.format,
                timeout=self.args.timeout,
            )
        except ValueError as e:
            return self._fail(str(e))

        output_path = self._resolve_output_path(pdf_path, options["format"])
        if output_path and output_path.lower().endswith(".pdf"):
            return self._fail(f"Refusing to write output to PDF path: {output_path}")

        set_log_context(options["mode"])

        try:
            document = process_pdf_text(
                pdf_path,
                mode=options["mode"],
                engine=options["engine"],
                timeout=options["timeout"],
                pages_str=self.args.pages,
            )
        except ExtractionError as e:
            return self._fail(f"Failed to extract PDF text. {e}")

        if options["format"] == "markdown":
            output = render_markdown(document, title=os.path.basename(pdf_path))
        else:
            output = render_text(document)

        if self.args.rich and options["format"] == "markdown":
            self.console.print(Markdown(output))
        elif output_path is None:
            self.console.file.write(output)

        if output_path:
            with open(output_path, "w", encoding="utf-8") as f:
                f.write(output)
            self.console.print(
                f"Extracted text to {options['format']}: {output_path}", markup=False
            )
            self.console.print(render_summary(document))
        return 0

    def _resolve_output_path(self, pdf_path, output_format):
        """Chooses the output file; None means print to stdout."""
        if self.args.stdout:
            return None
        if self.args.output_file:
            return self.args.output_file
        stem, _ = os.path.splitext(pdf_path)
        return stem + OUTPUT_FORMATS[output_format]

    def _fail(self, message) -> int:
        self.err_console.print(message, markup=False, highlight=False)
        return 1

    @staticmethod
    def parse_arguments(args=None):
        """Parses command-line arguments for the script."""
        examples = [
            "\nExamples:",
            "  python pdfmd.py paper.pdf",
            "  python pdfmd.py -- paper.pdf out.md",
            "  python pdfmd.py paper.pdf -m layout -f text",
            "  python pdfmd.py paper.pdf -E pdfminer --rich -d layout,struct",
        ]
        parser = argparse.ArgumentParser(
            description="Converts a PDF into readable, structurally segmented text.",
            formatter_class=CustomHelpFormatter,
            add_help=False,
            epilog="\n".join(examples),
        )

        g_opts = parser.add_argument_group("Main Options")
        g_opts.add_argument(
            "pdf_file",
            nargs="?",
            default=None,
            help="Path to the input PDF file.",
        )
        g_opts.add_argument(
            "output_file",
            nargs="?",
            default=None,
            help="Output path. Defaults to the PDF name with a format extension.",
        )
        g_opts.add_argument(
            "-h",
            "--help",
            action="help",
            help="Show this help message and exit.",
        )

        g_proc = parser.add_argument_group("Processing Control")
        g_proc.add_argument(
            "-m",
            "--mode",
            default=None,
            choices=MODES,
            help="Extraction mode. (default: from config, else semantic)",
        )
        g_proc.add_argument(
            "-E",
            "--engine",
            default=None,
            choices=ENGINES,
            help="Structural engine for semantic mode. (default: from config, else pdftohtml)",
        )
        g_proc.add_argument(
            "-p",
            "--pages",
            default="all",
            metavar="PAGES",
            help="Pages to process (e.g., '1,3,5-7'). (default: %(default)s)",
        )
        g_proc.add_argument(
            "--timeout",
            type=float,
            default=None,
            metavar="SECONDS",
            help="Timeout for external extraction tools. (default: from config, else 600)",
        )
        g_proc.add_argument(
            "--config",
            default=DEFAULT_CONFIG_PATH,
            metavar="FILE",
            help="INI file with default options. (default: %(default)s)",
        )

        g_out = parser.add_argument_group("Script Output")
        g_out.add_argument(
            "-f",
            "--format",
            default=None,
            choices=list(OUTPUT_FORMATS),
            help="Output format. (default: from config, else markdown)",
        )
        g_out.add_argument(
            "--stdout",
            action="store_true",
            help="Print the result instead of writing a file. (default: %(default)s)",
        )
        g_out.add_argument(
            "--rich",
            action="store_true",
            help="Render Markdown output in the terminal. (default: %(default)s)",
        )
        g_out.add_argument(
            "--log-file",
            metavar="FILE",
            default=None,
            help="Redirect all logging output to a specified file.",
        )
        g_out.add_argument(
            "--color-logs",
            action="store_true",
            help="Enable colored logging output. (default: %(default)s)",
        )
        g_out.add_argument(
            "-v",
            "--verbose",
            action="store_true",
            help="Enable INFO logging for detailed progress. (default: %(default)s)",
        )
        g_out.add_argument(
            "-d",
            "--debug",
            nargs="?",
            const="all",
            dest="debug_topics",
            metavar="TOPICS",
            help="Enable DEBUG logging (all,collect,layout,struct,render,source,api,config).",
        )

        return parser.parse_args(args)


def main():
    """Main entry point for the script."""
    # Basic logging config for early errors before full setup
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    try:
        args = Application.parse_arguments(sys.argv[1:])
        sys.exit(Application(args).run())
    except FileNotFoundError as e:
        logging.getLogger("pdfmd").critical(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        logging.getLogger("pdfmd").info("\nProcess interrupted by user. Exiting.")
        sys.exit(0)
    except Exception as e:
        logging.getLogger("pdfmd").critical(
            "\nAn unexpected error occurred: %s", e, exc_info=True
        )
        sys.exit(1)


if __name__ == "__main__":
    main()
