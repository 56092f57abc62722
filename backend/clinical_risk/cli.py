"""
Clinical Risk Engine - Command Line Calculator

Run any registered risk calculator from the terminal, either with
``field=value`` arguments or interactively with a live preview after each
answer.

Usage:
    clinical-risk --list                              # List calculators
    clinical-risk dapt age=80 diabetes=yes stent_diameter=2.5
    clinical-risk hcm_risk_scd age=45 max_wall_thickness=22 --preview
    clinical-risk gwtg_hf --interactive               # Prompt field by field
"""

import argparse
import sys
from typing import Any

from clinical_risk.services.scoring import (
    FieldKind,
    InputValidationError,
    Instrument,
    RiskAssessment,
    get_risk_scoring_service,
)
from clinical_risk.services.scoring.summary import category_label, format_summary

# ============================================================================
# Terminal Output
# ============================================================================


class Colors:
    CYAN = "\033[96m"
    YELLOW = "\033[93m"
    RED = "\033[91m"
    BOLD = "\033[1m"
    END = "\033[0m"
    GRAY = "\033[90m"


def print_header(text: str, char: str = "="):
    """Print a formatted header."""
    width = 80
    print()
    print(f"{Colors.BOLD}{Colors.CYAN}{char * width}{Colors.END}")
    print(f"{Colors.BOLD}{Colors.CYAN}{text.center(width)}{Colors.END}")
    print(f"{Colors.BOLD}{Colors.CYAN}{char * width}{Colors.END}")


def print_item(label: str, value: str, indent: int = 2):
    spaces = " " * indent
    print(f"{spaces}{Colors.GRAY}{label}:{Colors.END} {value}")


def print_warning(text: str):
    print(f"  {Colors.YELLOW}!{Colors.END} {text}")


def print_error(text: str):
    print(f"  {Colors.RED}✗{Colors.END} {text}")


# ============================================================================
# Argument Handling
# ============================================================================


def parse_assignments(pairs: list[str]) -> dict[str, str]:
    """Turn ``["age=80", "diabetes=yes"]`` into an input record.

    Values stay strings; the validator does the parsing.

    Raises:
        ValueError: If an argument is not of the form ``field=value``.
    """
    inputs: dict[str, str] = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name.strip():
            raise ValueError(f"Expected field=value, got {pair!r}")
        inputs[name.strip()] = value.strip()
    return inputs


def list_calculators() -> None:
    print_header("AVAILABLE RISK CALCULATORS")
    for instrument in get_risk_scoring_service().list_instruments():
        print()
        print(f"  {Colors.BOLD}{instrument.instrument_id}{Colors.END}  {instrument.name}")
        print_item("Estimates", instrument.description, indent=4)
        print_item("Fields", ", ".join(spec.name for spec in instrument.fields), indent=4)


def show_assessment(assessment: RiskAssessment, instrument: Instrument) -> None:
    title = "PRELIMINARY ESTIMATE" if assessment.is_preview else "RISK ASSESSMENT"
    print_header(f"{title}: {instrument.name}")
    print()
    print(format_summary(assessment, instrument))


# ============================================================================
# Interactive Mode
# ============================================================================


def _prompt_text(instrument: Instrument, name: str) -> str:
    spec = instrument.field_spec(name)
    if spec.kind == FieldKind.BOOLEAN:
        hint = "yes/no"
    elif spec.kind == FieldKind.CHOICE:
        hint = "/".join(spec.choices)
    else:
        hint = spec.range_text()
    return f"{spec.label} [{hint}]: "


def interactive_mode(instrument: Instrument) -> dict[str, Any]:
    """Ask for each field in schema order, previewing after every answer.

    Returns:
        The collected input record.
    """
    print_header(f"{instrument.name.upper()} - INTERACTIVE")
    print("  Press Enter to skip a field. Ctrl+D finishes early.")

    inputs: dict[str, Any] = {}
    for spec in instrument.fields:
        try:
            answer = input(_prompt_text(instrument, spec.name))
        except EOFError:
            print()
            break
        if answer.strip():
            inputs[spec.name] = answer.strip()

        preview = instrument.preview(inputs)
        if preview is not None:
            print_item(
                "Preview",
                f"{preview.display_score} {preview.score_unit} ({category_label(preview)})",
                indent=4,
            )
    return inputs


# ============================================================================
# Main Entry Point
# ============================================================================


def run(argv: list[str] | None = None) -> int:
    """Run the command line tool and return its exit code."""
    parser = argparse.ArgumentParser(
        prog="clinical-risk",
        description="Clinical Risk Engine - Command Line Calculator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  clinical-risk --list
  clinical-risk dapt age=80 diabetes=yes stent_diameter=2.5
  clinical-risk hcm_risk_scd age=45 max_wall_thickness=22 --preview
  clinical-risk gwtg_hf --interactive
""",
    )
    parser.add_argument("calculator", nargs="?", help="Calculator id, e.g. gwtg_hf")
    parser.add_argument("inputs", nargs="*", help="Inputs as field=value")
    parser.add_argument("--list", "-l", action="store_true", help="List available calculators")
    parser.add_argument(
        "--preview", "-p", action="store_true", help="Live preview from partial inputs"
    )
    parser.add_argument(
        "--interactive", "-i", action="store_true", help="Prompt for each field"
    )

    args = parser.parse_args(argv)

    if args.list or not args.calculator:
        list_calculators()
        return 0

    service = get_risk_scoring_service()
    try:
        instrument = service.get_instrument(args.calculator)
        inputs = parse_assignments(args.inputs)
    except ValueError as e:
        print_error(str(e))
        return 2

    if args.interactive:
        inputs.update(interactive_mode(instrument))

    if args.preview:
        preview = instrument.preview(inputs)
        if preview is None:
            needed = ", ".join(instrument.preview_required)
            print_warning(f"Preview needs at least: {needed}")
            return 1
        show_assessment(preview, instrument)
        return 0

    try:
        assessment = instrument.calculate(inputs)
    except InputValidationError as e:
        print_header("INVALID INPUT")
        for error in e.result.errors.values():
            print_error(f"{error.field}: {error.message}")
        return 1

    show_assessment(assessment, instrument)
    return 0


def main():
    sys.exit(run())


if __name__ == "__main__":
    main()
