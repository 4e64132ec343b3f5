"""ISO 639-1 language codes used to sanity-check locale folder names."""

from __future__ import annotations

import re

ISO_639_1: frozenset[str] = frozenset(
    """
    aa ab ae af ak am an ar as av ay az ba be bg bi bm bn bo br bs ca ce ch
    co cr cs cu cv cy da de dv dz ee el en eo es et eu fa ff fi fj fo fr fy
    ga gd gl gn gu gv ha he hi ho hr ht hu hy hz ia id ie ig ii ik io is it
    iu ja jv ka kg ki kj kk kl km kn ko kr ks ku kv kw ky la lb lg li ln lo
    lt lu lv mg mh mi mk ml mn mr ms mt my na nb nd ne ng nl nn no nr nv ny
    oc oj om or os pa pi pl ps pt qu rm rn ro ru rw sa sc sd se sg si sk sl
    sm sn so sq sr ss st su sv sw ta te tg th ti tk tl tn to tr ts tt tw ty
    ug uk ur uz ve vi vo wa wo xh yi yo za zh zu
    """.split()
)

# language[-_]subtag[-_]subtag...
_LOCALE_RE = re.compile(r"^([A-Za-z]{2})(?:[-_][A-Za-z0-9]{2,8})*$")


def is_standard_locale(code: str) -> bool:
    """Return True if *code* starts with a known ISO 639-1 language.

    Region and script subtags are accepted in either ``-`` or ``_``
    form (``pt-BR``, ``zh_Hant``) but not validated further.
    """
    match = _LOCALE_RE.match(code)
    return bool(match) and match.group(1).lower() in ISO_639_1
