import re
import logging

from ply.lex import lex, LexToken
from typing import List, Optional, Tuple

from mobsmells.parsers.parser import Parser
from mobsmells.exceptions import EXCEPTIONS, CatalogLoadError
from mobsmells.platform import Platform, Group, Category
from mobsmells.repr.entry import SmellEntry

REQUIRED_COLUMNS = ("name", "description")


class CatalogLexer:
    """Line-oriented lexer for the catalog document.

    Every line becomes a single token (a heading, a table row, a table
    delimiter row or free text) followed by a NEWLINE token. Blank lines are
    therefore two NEWLINE tokens in a row.
    """

    tokens = ("HEADING", "DELIMITER", "ROW", "TEXT", "NEWLINE")

    t_ignore = " \t\r"

    # Tokens defined as functions preserve order
    def t_HEADING(self, t: LexToken) -> LexToken:
        r"\#{1,6}[ \t]+[^\n]*"
        title = t.value.lstrip("#").strip()
        t.value = (len(t.value) - len(t.value.lstrip("#")), title.rstrip("#").strip())
        return t

    def t_DELIMITER(self, t: LexToken) -> LexToken:
        r"\|[ \t]*:?-+:?[ \t]*(?:\|[ \t]*:?-+:?[ \t]*)*\|?[ \t\r]*(?=\n|$)"
        return t

    def t_ROW(self, t: LexToken) -> LexToken:
        r"\|[^\n]*"
        t.value = split_row(t.value)
        return t

    def t_TEXT(self, t: LexToken) -> LexToken:
        r"[^\n]+"
        t.value = t.value.strip()
        return t

    def t_NEWLINE(self, t: LexToken) -> LexToken:
        r"\n"
        t.lexer.lineno += 1
        return t

    def t_error(self, t: LexToken) -> None:
        logging.error(f"Illegal character {t.value[0]!r} on line {t.lexer.lineno}.")
        t.lexer.skip(1)

    def tokenize(self, content: str) -> List[LexToken]:
        lexer = lex(module=self)
        lexer.input(content)
        return list(iter(lexer.token, None))


def split_row(row: str) -> List[str]:
    row = row.strip()
    if row.startswith("|"):
        row = row[1:]
    if row.endswith("|") and not row.endswith("\\|"):
        row = row[:-1]
    cells = re.split(r"(?<!\\)\|", row)
    # Line breaks inside a cell are written as <br>
    return [
        re.sub(r"<br\s*/?>", "\n", cell.strip().replace("\\|", "|"))
        for cell in cells
    ]


class MarkdownParser(Parser):
    def __init__(self) -> None:
        self.lexer = CatalogLexer()

    def __reset(self, path: str) -> None:
        self.path = path
        self.platform: Optional[Platform] = None
        self.group: Optional[Group] = None
        self.category: Optional[Category] = None
        self.platform_level: Optional[int] = None
        self.group_level: Optional[int] = None
        self.category_level: Optional[int] = None
        self.header: Optional[List[str]] = None
        self.pending_header: Optional[Tuple[List[str], int]] = None

    def __error(self, message: str, line: int) -> CatalogLoadError:
        return CatalogLoadError(self.path, message, line)

    def __end_table(self) -> None:
        if self.pending_header is not None:
            raise self.__error(
                EXCEPTIONS["MARKDOWN_NO_DELIMITER"], self.pending_header[1]
            )
        self.header = None

    def __clear_sections(self, level: int) -> None:
        if self.platform_level is not None and level <= self.platform_level:
            self.platform, self.platform_level = None, None
        if self.platform is None or (
            self.group_level is not None and level <= self.group_level
        ):
            self.group, self.group_level = None, None
        if self.group is None or (
            self.category_level is not None and level <= self.category_level
        ):
            self.category, self.category_level = None, None

    def __parse_heading(self, level: int, title: str, line: int) -> None:
        platform = Platform.from_label(title)
        if platform is not None:
            self.platform, self.group, self.category = platform, None, None
            self.platform_level, self.group_level, self.category_level = level, None, None
            return

        group = Group.from_label(title)
        if group is not None:
            if self.platform is None:
                raise self.__error(
                    EXCEPTIONS["MARKDOWN_GROUP_OUTSIDE_PLATFORM"].format(group.label),
                    line,
                )
            self.group, self.category = group, None
            self.group_level, self.category_level = level, None
            return

        category = Category.from_label(title)
        if category is not None:
            if self.group is None or category.group != self.group:
                current = "none" if self.group is None else self.group.label
                raise self.__error(
                    EXCEPTIONS["MARKDOWN_CATEGORY_OUTSIDE_GROUP"].format(
                        category.label, current
                    ),
                    line,
                )
            self.category, self.category_level = category, level
            return

        # Any other heading closes the sections at the same or a deeper level
        self.__clear_sections(level)
        logging.debug(f"{self.path}:{line}: ignoring heading '{title}'")

    def __parse_header(self, cells: List[str], line: int) -> List[str]:
        columns = [c.lower() for c in cells]
        for required in REQUIRED_COLUMNS:
            if required not in columns:
                raise self.__error(
                    EXCEPTIONS["MARKDOWN_MISSING_COLUMN"].format(required.capitalize()),
                    line,
                )
        return columns

    def __parse_row(self, cells: List[str], line: int) -> SmellEntry:
        assert self.header is not None
        assert self.platform is not None and self.category is not None

        if len(cells) != len(self.header):
            raise self.__error(
                EXCEPTIONS["MARKDOWN_ROW_COLUMNS"].format(len(cells), len(self.header)),
                line,
            )

        values = dict(zip(self.header, cells))
        for required in REQUIRED_COLUMNS:
            if values[required] == "":
                raise self.__error(
                    EXCEPTIONS["MARKDOWN_EMPTY_CELL"].format(required.capitalize()),
                    line,
                )

        return SmellEntry(
            self.platform,
            self.category,
            values["name"],
            values["description"],
            line,
        )

    def parse_content(self, content: str, path: str) -> List[SmellEntry]:
        self.__reset(path)
        entries: List[SmellEntry] = []
        previous: Optional[str] = None

        for tok in self.lexer.tokenize(content):
            if tok.type == "NEWLINE":
                # A blank line closes the current table
                if previous == "NEWLINE":
                    self.__end_table()
                previous = tok.type
                continue
            previous = tok.type

            if tok.type == "HEADING":
                self.__end_table()
                self.__parse_heading(tok.value[0], tok.value[1], tok.lineno)
            elif tok.type == "TEXT":
                self.__end_table()
            elif tok.type == "DELIMITER" and self.header is not None:
                # A body row made of dashes only
                entries.append(self.__parse_row(split_row(tok.value), tok.lineno))
            elif tok.type == "DELIMITER":
                if self.pending_header is None:
                    raise self.__error(EXCEPTIONS["MARKDOWN_NO_HEADER"], tok.lineno)
                cells, line = self.pending_header
                self.pending_header = None
                self.header = self.__parse_header(cells, line)
            elif tok.type == "ROW":
                if self.pending_header is not None:
                    raise self.__error(
                        EXCEPTIONS["MARKDOWN_NO_DELIMITER"], self.pending_header[1]
                    )
                elif self.header is None:
                    if self.platform is None or self.category is None:
                        raise self.__error(
                            EXCEPTIONS["MARKDOWN_OUTSIDE_SECTION"], tok.lineno
                        )
                    self.pending_header = (tok.value, tok.lineno)
                else:
                    entries.append(self.__parse_row(tok.value, tok.lineno))

        self.__end_table()
        logging.debug(f"Parsed {len(entries)} smells from {path}")
        return entries
