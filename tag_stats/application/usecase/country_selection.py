from typing import Iterable

from tag_stats.domain.errors import CountrySelectionError, UnknownCountryError

ALL_COUNTRIES = "ALL"


def parse_country_selection(raw: str, available: Iterable[str]) -> list[str]:
    """
    콤마로 구분된 국가 코드 입력을 검증한다.

    - 공백은 무시하고 대소문자 구분 없이 관측된 국가 코드와 비교한다.
    - ALL 은 관측된 모든 국가를 뜻한다.
    - 중복은 처음 나온 순서만 남긴다.
    - 관측되지 않은 코드가 하나라도 있으면 UnknownCountryError 를 던진다.
    """
    lookup = {code.upper(): code for code in available}
    selected: list[str] = []

    for token in (raw or "").split(","):
        code = "".join(token.split()).upper()
        if not code:
            continue
        if code == ALL_COUNTRIES:
            matches = sorted(lookup.values())
        elif code in lookup:
            matches = [lookup[code]]
        else:
            raise UnknownCountryError(token.strip())
        for match in matches:
            if match not in selected:
                selected.append(match)

    if not selected:
        raise CountrySelectionError("No country selected")
    return selected


def resolve_country(code: str, available: Iterable[str]) -> str:
    """
    관측된 국가 코드 하나를 대소문자 구분 없이 찾는다. ALL 이나 목록은 받지 않는다.
    """
    lookup = {c.upper(): c for c in available}
    key = (code or "").strip().upper()
    if key not in lookup:
        raise UnknownCountryError(code)
    return lookup[key]
