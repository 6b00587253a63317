from __future__ import annotations

import re

import phonenumbers
from phonenumbers import NumberParseException, PhoneNumberFormat


def _only_digits(s: str) -> str:
    return re.sub(r"\D+", "", s or "")


def _parse(raw: str, default_region: str) -> phonenumbers.PhoneNumber | None:
    try:
        num = phonenumbers.parse(raw, default_region)
        if phonenumbers.is_possible_number(num):
            return num
    except NumberParseException:
        pass
    # internacional sem '+', ex.: '5511988887777' ou '005511988887777'
    digits = _only_digits(raw)
    if digits.startswith("00"):
        digits = digits[2:]
    try:
        return phonenumbers.parse("+" + digits)
    except NumberParseException:
        return None


def normalize_phone(raw: str, default_region: str = "BR", with_plus: bool = False) -> str | None:
    """
    Retorna o número em formato internacional.
    - '(11) 98888-7777' → '5511988887777'
    - with_plus=True    → '+5511988887777'
    Retorna None quando o número não é plausível.
    """
    if not raw or not _only_digits(raw):
        return None

    num = _parse(raw, default_region)
    if num is None or not phonenumbers.is_possible_number(num):
        return None

    e164 = phonenumbers.format_number(num, PhoneNumberFormat.E164)
    return e164 if with_plus else _only_digits(e164)


def format_phone(raw: str, default_region: str = "BR") -> str:
    """
    Máscara de exibição no padrão nacional: '(11) 98888-7777'.
    Entradas que não formam um telefone plausível voltam como vieram.
    """
    if not raw:
        return raw
    num = _parse(raw, default_region)
    if num is None or not phonenumbers.is_possible_number(num):
        return raw
    if num.country_code != phonenumbers.country_code_for_region(default_region):
        return phonenumbers.format_number(num, PhoneNumberFormat.INTERNATIONAL)
    return phonenumbers.format_number(num, PhoneNumberFormat.NATIONAL)
