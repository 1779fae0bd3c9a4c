"""
Localizable message catalog.
Errors carry keys; the transport renders them for the caller's Accept-Language.
"""

from __future__ import annotations

from hydration_tracker.config import settings

MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "error.internal": "An unexpected error occurred. Please try again later.",
        "error.unauthenticated": "Not authenticated.",
        "intake.not_found": "Water intake record not found.",
        "intake.duplicate_timestamp": "A water intake is already recorded at this date and time.",
        "intake.filter.invalid": "Invalid filter parameters.",
        "intake.filter.date_range.order": "Start date must be before end date.",
        "intake.filter.date_range.too_wide": "Date range cannot exceed {max_days} days.",
        "intake.filter.date_range.future": "Filter dates must not be in the future.",
        "intake.filter.volume_range.order": "Minimum volume must be less than or equal to maximum volume.",
        "intake.filter.volume.negative": "Volume bounds must not be negative.",
        "intake.filter.volume_unit.unknown": "Unknown volume unit.",
        "intake.filter.page_size.range": "Page size must be between 1 and {max_size}.",
        "intake.filter.page.negative": "Page index must not be negative.",
        "intake.filter.sort_field.invalid": "Invalid sort field.",
        "intake.filter.sort_direction.invalid": "Sort direction must be ASC or DESC.",
        "unit.unknown": "Unknown measurement unit.",
    },
    "pt-BR": {
        "error.internal": "Ocorreu um erro inesperado. Tente novamente mais tarde.",
        "error.unauthenticated": "Não autenticado.",
        "intake.not_found": "Registro de ingestão de água não encontrado.",
        "intake.duplicate_timestamp": "Já existe uma ingestão de água registrada nesta data e hora.",
        "intake.filter.invalid": "Parâmetros de filtro inválidos.",
        "intake.filter.date_range.order": "A data inicial deve ser anterior à data final.",
        "intake.filter.date_range.too_wide": "O intervalo de datas não pode exceder {max_days} dias.",
        "intake.filter.date_range.future": "As datas do filtro não podem estar no futuro.",
        "intake.filter.volume_range.order": "O volume mínimo deve ser menor ou igual ao volume máximo.",
        "intake.filter.volume.negative": "Os limites de volume não podem ser negativos.",
        "intake.filter.volume_unit.unknown": "Unidade de volume desconhecida.",
        "intake.filter.page_size.range": "O tamanho da página deve estar entre 1 e {max_size}.",
        "intake.filter.page.negative": "O índice da página não pode ser negativo.",
        "intake.filter.sort_field.invalid": "Campo de ordenação inválido.",
        "intake.filter.sort_direction.invalid": "A direção de ordenação deve ser ASC ou DESC.",
        "unit.unknown": "Unidade de medida desconhecida.",
    },
}


def resolve_locale(accept_language: str | None) -> str:
    """Pick the first supported locale from an Accept-Language header (q-values ignored)."""
    supported = [loc for loc in settings.locales if loc in MESSAGES]
    if accept_language:
        for part in accept_language.split(","):
            tag = part.split(";")[0].strip()
            if not tag:
                continue
            for loc in supported:
                if loc.lower() == tag.lower():
                    return loc
            # "pt" matches "pt-BR"
            primary = tag.split("-")[0].lower()
            for loc in supported:
                if loc.split("-")[0].lower() == primary:
                    return loc
    return settings.default_locale if settings.default_locale in MESSAGES else "en"


def render(key: str, locale: str | None = None, **params) -> str:
    """Render a message key; unknown keys are returned as-is."""
    catalog = MESSAGES.get(locale or settings.default_locale) or MESSAGES["en"]
    template = catalog.get(key) or MESSAGES["en"].get(key)
    if template is None:
        return key
    try:
        return template.format(**params)
    except KeyError:
        return template
