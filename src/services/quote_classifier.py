from __future__ import annotations

from domain.quotes import QuoteType

# Order matters: the first rule with a matching fragment wins.
CLASSIFICATION_RULES: tuple[tuple[tuple[str, ...], QuoteType], ...] = (
    (("/cotizacion-dolar-oficial", "/cotizaciondolaroficial"), QuoteType.OFICIAL),
    (("/cotizacion-dolar-blue", "/cotizaciondolarblue"), QuoteType.BLUE),
    (("/cotizacion-dolar-mep", "/cotizaciondolarmep", "/cotizaciondolarbolsa"), QuoteType.MEP),
    (("/cotizacion-dolar-ccl", "/cotizaciondolarccl", "/cotizaciondolarcontadoconliqui"), QuoteType.CCL),
    (("/cotizacion-dolar-cripto", "/cotizaciondolarcripto", "/seccion/bitcoins"), QuoteType.CRIPTO),
    (("/cotizacion-dolar-tarjeta", "/cotizaciondolartarjeta"), QuoteType.TARJETA),
)


def classify(link_target: str | None) -> QuoteType | None:
    """Map a tile's link target to the quote type it shows, if any."""
    if not link_target:
        return None
    for fragments, quote_type in CLASSIFICATION_RULES:
        if any(fragment in link_target for fragment in fragments):
            return quote_type
    return None


__all__ = ["CLASSIFICATION_RULES", "classify"]
