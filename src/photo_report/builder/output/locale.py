"""
Module: builder.output.locale

Purpose:
    Locale-dependent strings and date formats for rendered reports.
    Dates stay ``datetime.date`` in the data; formatting happens only here.

Key Functions:
    - labels_for(): ReportLabels for a locale tag like "fr-FR"
    - format_date(): Locale-formatted calendar date
    - resolve_locale(): Normalize a locale tag to a supported one
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict


@dataclass(frozen=True)
class ReportLabels:
    """Fixed texts drawn on a report."""

    title: str
    company_city: str
    mission: str
    date_range: str
    single_date: str
    before: str
    after: str
    images_unavailable: str
    image_unavailable: str
    footer: str


_FRENCH = ReportLabels(
    title="Rapport Photo d'Intervention",
    company_city="PROMOTEUR: {company} - VILLE: {city}",
    mission="Mission: {task}",
    date_range="Intervention du {start} au {end}",
    single_date="Intervention le: {start}",
    before="AVANT",
    after="APRÈS",
    images_unavailable="Images non disponibles",
    image_unavailable="Image non disponible",
    footer="Page {page} / {total}",
)

_ENGLISH = ReportLabels(
    title="Photo Intervention Report",
    company_city="COMPANY: {company} - CITY: {city}",
    mission="Mission: {task}",
    date_range="Intervention from {start} to {end}",
    single_date="Intervention on: {start}",
    before="BEFORE",
    after="AFTER",
    images_unavailable="Images unavailable",
    image_unavailable="Image unavailable",
    footer="Page {page} / {total}",
)

LABELS: Dict[str, ReportLabels] = {
    "fr-FR": _FRENCH,
    "fr-BE": _FRENCH,
    "fr-CH": _FRENCH,
    "en-GB": _ENGLISH,
    "en-US": _ENGLISH,
}

DATE_FORMATS: Dict[str, str] = {
    "fr-FR": "%d/%m/%Y",
    "fr-BE": "%d/%m/%Y",
    "fr-CH": "%d.%m.%Y",
    "en-GB": "%d/%m/%Y",
    "en-US": "%m/%d/%Y",
}

# Bare language tags map to their main region
_LANGUAGE_DEFAULTS = {"fr": "fr-FR", "en": "en-US"}

SUPPORTED_LOCALES = tuple(sorted(LABELS))


def resolve_locale(locale: str) -> str:
    """
    Normalize a locale tag ("fr_fr", "FR", "en-us") to a supported one.

    Raises:
        ValueError: If neither the tag nor its language is supported
    """
    parts = locale.replace("_", "-").split("-")
    language = parts[0].lower()
    tag = f"{language}-{parts[1].upper()}" if len(parts) > 1 and parts[1] else language
    if tag in LABELS:
        return tag
    if language in _LANGUAGE_DEFAULTS:
        return _LANGUAGE_DEFAULTS[language]
    raise ValueError(f"Unsupported locale: {locale!r} (supported: {', '.join(SUPPORTED_LOCALES)})")


def labels_for(locale: str) -> ReportLabels:
    """Labels for a locale tag."""
    return LABELS[resolve_locale(locale)]


def format_date(value: date, locale: str) -> str:
    """
    Format a calendar date for display.

    Example:
        >>> format_date(date(2024, 3, 7), "fr-FR")
        '07/03/2024'
        >>> format_date(date(2024, 3, 7), "en-US")
        '03/07/2024'
    """
    return value.strftime(DATE_FORMATS[resolve_locale(locale)])
