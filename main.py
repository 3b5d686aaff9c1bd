#!/usr/bin/env python3
"""Job Finder — page through Jooble results and save a selection as applications."""

import asyncio
import logging
import sys

import config
from applications import ApplicationStore
from models import SearchQuery
from notifier import LoggingNotifier
from reconciler import PageReconciler, ViewState
from sources.jooble import JoobleSource

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)

HELP = (
    "Commands: n = next page, p = previous page, s 1 3 = check rows 1 and 3 on this page,\n"
    "          / keywords | location | salary = new search, c = create applications, q = quit"
)


def render(state: ViewState) -> str:
    """Render the current page as a numbered plain-text table."""
    if state.loading:
        return "Loading..."
    lines = []
    if state.error_message:
        lines.append(f"Error: {state.error_message}")
    checked = set(state.selected_row_keys)
    for i, row in enumerate(state.rows, start=1):
        mark = "[x]" if row.key in checked else "[ ]"
        title = row.get("title") or "(untitled)"
        company = row.get("company") or ""
        location = row.get("location") or ""
        salary = row.get("salary") or ""
        lines.append(f"{mark} {i:>3}. {title} — {company} | {location} | {salary}")
    if not state.rows:
        lines.append("No results.")
    lines.append(
        f"Page {state.page}/{state.total_pages} ({state.total_count} jobs) | "
        f"{state.selection_count} selected"
    )
    return "\n".join(lines)


def parse_search(text: str, current: SearchQuery) -> SearchQuery:
    """Parse 'keywords | location | salary'; omitted parts keep their current value."""
    parts = [p.strip() for p in text.split("|")]
    keywords = parts[0] if parts and parts[0] else current.keywords
    location = parts[1] if len(parts) > 1 else current.location
    min_salary = SearchQuery.parse_salary(parts[2]) if len(parts) > 2 else current.min_salary
    return SearchQuery(keywords=keywords, location=location, min_salary=min_salary)


def parse_rows(args: list[str], row_count: int) -> list[int]:
    """1-based row numbers to 0-based indexes, ignoring anything out of range."""
    indexes = []
    for arg in args:
        try:
            n = int(arg)
        except ValueError:
            continue
        if 1 <= n <= row_count:
            indexes.append(n - 1)
    return indexes


async def handle_command(reconciler: PageReconciler, line: str) -> bool:
    """Apply one command. Returns False when the user asks to quit."""
    line = line.strip()
    if not line:
        return True
    cmd, _, rest = line.partition(" ")
    if cmd == "q":
        return False
    if cmd == "n":
        await reconciler.next_page()
    elif cmd == "p":
        await reconciler.prev_page()
    elif cmd == "s":
        indexes = parse_rows(rest.split(), len(reconciler.rows))
        reconciler.select([reconciler.rows[i] for i in indexes])
    elif cmd.startswith("/"):
        text = line[1:]
        await reconciler.search(parse_search(text, reconciler.query))
    elif cmd == "c":
        await reconciler.create_applications()
    else:
        print(HELP)
    return True


async def run(query: SearchQuery) -> None:
    reconciler = PageReconciler(
        source=JoobleSource(),
        sink=ApplicationStore(),
        notifier=LoggingNotifier(),
        query=query,
    )

    def show(state: ViewState) -> None:
        if not state.loading:
            print(render(state))

    reconciler.subscribe(show)

    print(HELP)
    await reconciler.search()
    while True:
        try:
            line = await asyncio.to_thread(input, "> ")
        except EOFError:
            break
        if not await handle_command(reconciler, line):
            break


def query_from_argv(argv: list[str]) -> SearchQuery:
    keywords = argv[0] if len(argv) > 0 else config.KEYWORDS
    location = argv[1] if len(argv) > 1 else config.LOCATION
    min_salary = SearchQuery.parse_salary(argv[2]) if len(argv) > 2 else config.MIN_SALARY
    return SearchQuery(keywords=keywords, location=location, min_salary=min_salary)


if __name__ == "__main__":
    try:
        asyncio.run(run(query_from_argv(sys.argv[1:])))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Job finder failed: {e}", exc_info=True)
        sys.exit(1)
