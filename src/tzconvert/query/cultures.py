"""Culture-specific date vocabularies.

dateutil reads month names, weekday names and filler words from a
:class:`dateutil.parser.parserinfo`. The subclasses here carry those words for
the languages the parser knows natively; every other culture uses dateutil's
English defaults.
"""

from __future__ import annotations

from functools import lru_cache

from dateutil import parser as dateutil_parser


class FrenchParserInfo(dateutil_parser.parserinfo):
    JUMP = dateutil_parser.parserinfo.JUMP + ["le", "à"]
    WEEKDAYS = [
        ("lun", "lundi"),
        ("mar", "mardi"),
        ("mer", "mercredi"),
        ("jeu", "jeudi"),
        ("ven", "vendredi"),
        ("sam", "samedi"),
        ("dim", "dimanche"),
    ]
    MONTHS = [
        ("janv", "janvier"),
        ("févr", "fevr", "février", "fevrier"),
        ("mars",),
        ("avr", "avril"),
        ("mai",),
        ("juin",),
        ("juil", "juillet"),
        ("août", "aout"),
        ("sept", "septembre"),
        ("oct", "octobre"),
        ("nov", "novembre"),
        ("déc", "dec", "décembre", "decembre"),
    ]


class GermanParserInfo(dateutil_parser.parserinfo):
    JUMP = dateutil_parser.parserinfo.JUMP + ["um", "den"]
    # Two-letter weekday abbreviations collide with ordinary words
    WEEKDAYS = [
        ("montag",),
        ("dienstag",),
        ("mittwoch",),
        ("donnerstag",),
        ("freitag",),
        ("samstag", "sonnabend"),
        ("sonntag",),
    ]
    MONTHS = [
        ("jan", "januar", "jän", "jänner"),
        ("feb", "februar"),
        ("mär", "märz", "maerz"),
        ("apr", "april"),
        ("mai",),
        ("jun", "juni"),
        ("jul", "juli"),
        ("aug", "august"),
        ("sep", "sept", "september"),
        ("okt", "oktober"),
        ("nov", "november"),
        ("dez", "dezember"),
    ]


class SpanishParserInfo(dateutil_parser.parserinfo):
    JUMP = dateutil_parser.parserinfo.JUMP + ["de", "del", "el"]
    # "mar" is March, not Tuesday
    WEEKDAYS = [
        ("lun", "lunes"),
        ("martes",),
        ("mié", "miércoles", "miercoles"),
        ("jue", "jueves"),
        ("vie", "viernes"),
        ("sáb", "sábado", "sabado"),
        ("dom", "domingo"),
    ]
    MONTHS = [
        ("ene", "enero"),
        ("feb", "febrero"),
        ("mar", "marzo"),
        ("abr", "abril"),
        ("may", "mayo"),
        ("jun", "junio"),
        ("jul", "julio"),
        ("ago", "agosto"),
        ("sep", "sept", "septiembre", "setiembre"),
        ("oct", "octubre"),
        ("nov", "noviembre"),
        ("dic", "diciembre"),
    ]


class ItalianParserInfo(dateutil_parser.parserinfo):
    JUMP = dateutil_parser.parserinfo.JUMP + ["il", "alle"]
    WEEKDAYS = [
        ("lunedì", "lunedi"),
        ("martedì", "martedi"),
        ("mercoledì", "mercoledi"),
        ("giovedì", "giovedi"),
        ("venerdì", "venerdi"),
        ("sabato",),
        ("domenica",),
    ]
    MONTHS = [
        ("gen", "gennaio"),
        ("feb", "febbraio"),
        ("mar", "marzo"),
        ("apr", "aprile"),
        ("mag", "maggio"),
        ("giu", "giugno"),
        ("lug", "luglio"),
        ("ago", "agosto"),
        ("set", "settembre"),
        ("ott", "ottobre"),
        ("nov", "novembre"),
        ("dic", "dicembre"),
    ]


class PortugueseParserInfo(dateutil_parser.parserinfo):
    JUMP = dateutil_parser.parserinfo.JUMP + ["de", "às", "feira"]
    WEEKDAYS = [
        ("seg", "segunda"),
        ("ter", "terça", "terca"),
        ("qua", "quarta"),
        ("qui", "quinta"),
        ("sex", "sexta"),
        ("sáb", "sábado", "sabado"),
        ("dom", "domingo"),
    ]
    MONTHS = [
        ("jan", "janeiro"),
        ("fev", "fevereiro"),
        ("mar", "março", "marco"),
        ("abr", "abril"),
        ("mai", "maio"),
        ("jun", "junho"),
        ("jul", "julho"),
        ("ago", "agosto"),
        ("set", "setembro"),
        ("out", "outubro"),
        ("nov", "novembro"),
        ("dez", "dezembro"),
    ]


class DutchParserInfo(dateutil_parser.parserinfo):
    JUMP = dateutil_parser.parserinfo.JUMP + ["om"]
    WEEKDAYS = [
        ("maandag",),
        ("dinsdag",),
        ("woensdag",),
        ("donderdag",),
        ("vrijdag",),
        ("zaterdag",),
        ("zondag",),
    ]
    MONTHS = [
        ("jan", "januari"),
        ("feb", "februari"),
        ("mrt", "maart"),
        ("apr", "april"),
        ("mei",),
        ("jun", "juni"),
        ("jul", "juli"),
        ("aug", "augustus"),
        ("sep", "sept", "september"),
        ("okt", "oktober"),
        ("nov", "november"),
        ("dec", "december"),
    ]


PARSERINFO_BY_LANGUAGE: dict[str, type[dateutil_parser.parserinfo]] = {
    "fr": FrenchParserInfo,
    "de": GermanParserInfo,
    "es": SpanishParserInfo,
    "it": ItalianParserInfo,
    "pt": PortugueseParserInfo,
    "nl": DutchParserInfo,
}


def language_of(culture_name: str) -> str:
    return culture_name.replace("_", "-").split("-")[0].lower()


@lru_cache(maxsize=None)
def parser_for(culture_name: str) -> dateutil_parser.parser:
    """Return a dateutil parser reading the culture's month and weekday names."""
    info_class = PARSERINFO_BY_LANGUAGE.get(language_of(culture_name), dateutil_parser.parserinfo)
    return dateutil_parser.parser(info_class())


__all__ = ["PARSERINFO_BY_LANGUAGE", "language_of", "parser_for"]
