from __future__ import annotations

import logging
import re
from typing import Sequence

from exactmoney.domain.currency import AnyCurrency
from exactmoney.domain.money import Money
from exactmoney.errors import ParseFailure
from exactmoney.parsers.base import MoneyParser

log = logging.getLogger(__name__)

MARKS = (".", ",", "·", "’", "˙", "'", " ")

_MARKS = re.escape("".join(MARKS))
_NON_SPACE_MARKS = re.escape("".join(m for m in MARKS if m != " "))
_NON_DOT_MARKS = "".join(m for m in MARKS if m != ".")
_NON_COMMA_MARKS = "".join(m for m in MARKS if m != ",")

NUMERIC_REGEX = re.compile(rf"[+\-]?[\d{_NON_SPACE_MARKS}][\d{_MARKS}]*")
MARK_REGEX = re.compile(rf"[{_MARKS}]")
TRAILING_MARK_REGEX = re.compile(rf"[{_MARKS}]$")
LEADING_INTEGER_REGEX = re.compile(r"^\s*[+\-]?\d+")
DIGIT_REGEX = re.compile(r"\d")

# 1,234,567.89
DOT_DECIMAL_REGEX = re.compile(
    rf"[+\-]?\d+(?:[{re.escape(_NON_DOT_MARKS)}]\d{{3}})+(?:\.\d{{2,}})?"
)
# 1.234.567,89
COMMA_DECIMAL_REGEX = re.compile(
    rf"[+\-]?\d+(?:[{re.escape(_NON_COMMA_MARKS)}]\d{{3}})+(?:,\d{{2,}})?"
)
# 12,34,567.89
INDIAN_NUMERIC_REGEX = re.compile(r"[+\-]?\d+(?:,\d{2})+(?:,\d{3})(?:\.\d{2})?")
# 1,1123,4567.89
CHINESE_NUMERIC_REGEX = re.compile(r"[+\-]?\d+(?:,\d{4})+(?:\.\d{2})?")

_DELETE_NON_DOT_MARKS = str.maketrans("", "", _NON_DOT_MARKS)
_DELETE_NON_COMMA_MARKS = str.maketrans("", "", _NON_COMMA_MARKS)
_DELETE_MARKS = str.maketrans("", "", "".join(MARKS))


class FuzzyParser(MoneyParser):
    """
    Best-effort parser for amounts typed by people.

    The first run of digits and marks (``. , · ’ ˙ '`` and space) is taken
    from the input and the decimal mark is guessed:

    * several marks: the run must look like 1,234,567.89, 1.234.567,89,
      12,34,567.89 (Indian) or 1,1234,5678.89 (Chinese grouping);
    * otherwise the last mark is the decimal mark when the other marks all
      differ from it, when fewer than 3 digits follow it, when the integer
      part is 0, or when it is the currency's decimal mark.

    These heuristics get some inputs badly wrong ("1.000" is a thousand in
    EUR but one in JOD). Prefer ``LocaleAwareParser`` or ``SimpleParser``
    when the input format is known.

    Unparseable input yields ``Money(0)``, or ``ParseFailure`` with
    ``strict=True``.
    """

    def parse(self, input: object, currency: object = None, *, strict: bool = False) -> Money:
        currency = self._currency(currency)
        amount = self._extract_amount(input, currency, strict)
        return Money(amount, currency)

    def _extract_amount(self, input: object, currency: AnyCurrency, strict: bool) -> object:
        if not isinstance(input, str):
            return input

        if input.strip() == "":
            return "0"

        match = NUMERIC_REGEX.search(input)
        number = match.group(0).strip() if match else ""
        if number == "":
            if strict:
                raise ParseFailure(f"invalid money string: {input}")
            return "0"

        marks = MARK_REGEX.findall(number)
        if not marks:
            return number

        if len(marks) == 1:
            return self._guess(input, number, marks, currency, strict)

        number = TRAILING_MARK_REGEX.sub("", number, count=1)

        for pattern in (DOT_DECIMAL_REGEX, INDIAN_NUMERIC_REGEX, CHINESE_NUMERIC_REGEX):
            if pattern.fullmatch(number):
                return number.translate(_DELETE_NON_DOT_MARKS)

        if COMMA_DECIMAL_REGEX.fullmatch(number):
            return number.translate(_DELETE_NON_COMMA_MARKS).replace(",", ".", 1)

        if strict:
            raise ParseFailure(f"invalid money string: {input}")

        amount = self._guess(input, number, marks, currency, strict)
        log.debug("no grouping pattern matched %r, guessed amount %s", input, amount)
        return amount

    def _guess(self, input: str, number: str, marks: Sequence[str], currency: AnyCurrency, strict: bool) -> str:
        amount = _normalize_number(number, marks, currency)
        # a sign and marks alone, as in "-." or "$-,"
        if not DIGIT_REGEX.search(amount):
            if strict:
                raise ParseFailure(f"invalid money string: {input}")
            return "0"
        return amount


def _normalize_number(number: str, marks: Sequence[str], currency: AnyCurrency) -> str:
    head, _, tail = number.rpartition(marks[-1])
    head = head.translate(_DELETE_MARKS)

    if _last_digits_decimals(head, tail, marks, currency):
        return f"{head}.{tail}"
    return f"{head}{tail}"


def _last_digits_decimals(head: str, tail: str, marks: Sequence[str], currency: AnyCurrency) -> bool:
    *other_marks, last_mark = marks

    # grouping marks always differ from the decimal mark: 1,234,456
    unique_marks = set(other_marks)
    if len(unique_marks) == 1:
        return last_mark not in unique_marks

    # a thousands group has 3 digits, so 1,23 is 1 dollar and 23 cents
    if len(tail) < 3:
        return tail != ""

    # 0,23
    if _leading_integer(head) == 0:
        return True

    return currency.decimal_mark == last_mark


def _leading_integer(text: str) -> int:
    match = LEADING_INTEGER_REGEX.match(text)
    return int(match.group(0)) if match else 0
