"""Static nickname / given-name alias table.

The source data below lists each nickname (or alternate spelling) against the
canonical given names it stands for.  :data:`NAME_VARIATIONS` is derived from
it once at import time and holds both directions: ``"bob"`` maps to
``"robert"`` and ``"robert"`` maps back to ``"bob"``, ``"rob"`` and
``"bobby"``.  The result is read-only.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

# nickname -> canonical given name(s)
_NICKNAME_TO_CANONICAL: dict[str, tuple[str, ...]] = {
    # ── Men ──────────────────────────────────────────────────────────────
    "al": ("albert", "alan", "allen"),
    "andy": ("andrew",),
    "art": ("arthur",),
    "barry": ("barrett",),
    "ben": ("benjamin",),
    "benny": ("benjamin",),
    "bill": ("william",),
    "billy": ("william",),
    "bob": ("robert",),
    "bobby": ("robert",),
    "brad": ("bradley",),
    "cal": ("calvin",),
    "cam": ("cameron",),
    "chad": ("charles",),
    "charlie": ("charles",),
    "chris": ("christopher",),
    "chuck": ("charles",),
    "curt": ("curtis",),
    "dan": ("daniel",),
    "danny": ("daniel",),
    "dave": ("david",),
    "davey": ("david",),
    "dick": ("richard",),
    "don": ("donald",),
    "donnie": ("donald",),
    "doug": ("douglas",),
    "drew": ("andrew",),
    "ed": ("edward",),
    "eddie": ("edward",),
    "frank": ("francis",),
    "fred": ("frederick",),
    "gabe": ("gabriel",),
    "gary": ("garrett",),
    "gene": ("eugene",),
    "greg": ("gregory",),
    "harry": ("harold", "henry"),
    "howie": ("howard",),
    "jack": ("john", "jackson"),
    "jake": ("jacob",),
    "jay": ("jason", "james"),
    "jeff": ("jeffrey",),
    "jerry": ("gerald", "jerome"),
    "jim": ("james",),
    "jimmy": ("james",),
    "joe": ("joseph",),
    "joey": ("joseph",),
    "johnny": ("john",),
    "jon": ("jonathan", "john"),
    "josh": ("joshua",),
    "ken": ("kenneth",),
    "kenny": ("kenneth",),
    "larry": ("lawrence",),
    "lou": ("louis",),
    "luke": ("lucas",),
    "mark": ("marcus",),
    "marty": ("martin",),
    "matt": ("matthew",),
    "max": ("maxwell", "maximilian"),
    "mickey": ("michael",),
    "micky": ("michael",),
    "mike": ("michael",),
    "nate": ("nathan",),
    "nick": ("nicholas",),
    "nicky": ("nicholas",),
    "norm": ("norman",),
    "ollie": ("oliver",),
    "pete": ("peter",),
    "phil": ("philip",),
    "quinn": ("quinton",),
    "randy": ("randall",),
    "ray": ("raymond",),
    "rich": ("richard",),
    "richie": ("richard",),
    "rick": ("richard",),
    "ricky": ("richard",),
    "rob": ("robert",),
    "ron": ("ronald",),
    "ronnie": ("ronald",),
    "russ": ("russell",),
    "sean": ("john",),
    "shane": ("john",),
    "shawn": ("john",),
    "stan": ("stanley",),
    "steve": ("steven", "stephen"),
    "stevie": ("steven", "stephen"),
    "stu": ("stuart",),
    "ted": ("edward", "theodore"),
    "tim": ("timothy",),
    "tom": ("thomas",),
    "tommy": ("thomas",),
    "tony": ("anthony",),
    "trev": ("trevor",),
    "vic": ("victor",),
    "walt": ("walter",),
    "wes": ("wesley",),
    "will": ("william",),
    "zach": ("zachary",),
    # ── Women ────────────────────────────────────────────────────────────
    "amy": ("amelia",),
    "becky": ("rebecca",),
    "beth": ("elizabeth",),
    "betty": ("elizabeth",),
    "carol": ("caroline",),
    "carrie": ("caroline",),
    "cindy": ("cynthia",),
    "deb": ("deborah",),
    "debbie": ("deborah",),
    "jen": ("jennifer",),
    "jenny": ("jennifer",),
    "jess": ("jessica",),
    "jessie": ("jessica",),
    "kate": ("katherine", "kathryn"),
    "kathy": ("katherine", "kathryn"),
    "katie": ("katherine", "kathryn"),
    "lisa": ("elizabeth",),
    "liz": ("elizabeth",),
    "maggie": ("margaret",),
    "mandy": ("amanda",),
    "meg": ("margaret",),
    "mel": ("melissa", "melanie"),
    "nancy": ("ann", "anne"),
    "pat": ("patricia", "patrick"),
    "patty": ("patricia",),
    "peggy": ("margaret",),
    "sandy": ("sandra",),
    "sue": ("susan",),
    "susie": ("susan",),
    "terry": ("teresa", "terence"),
    "trish": ("patricia",),
    # ── Shared / either ──────────────────────────────────────────────────
    "alex": ("alexander", "alexandra"),
    "sam": ("samuel", "samantha"),
    # ── Alternate spellings ──────────────────────────────────────────────
    "aron": ("aaron",),
    "bryan": ("brian",),
    "carl": ("karl",),
    "derrick": ("derek",),
    "erik": ("eric",),
    "neal": ("neil",),
    "allen": ("alan",),
}


def _build_variation_table(
    source: Mapping[str, tuple[str, ...]],
) -> Mapping[str, frozenset[str]]:
    """Close *source* under reversal so every pair works in both directions."""
    table: dict[str, set[str]] = {}
    for nickname, canonicals in source.items():
        for canonical in canonicals:
            if canonical == nickname:
                continue
            table.setdefault(nickname, set()).add(canonical)
            table.setdefault(canonical, set()).add(nickname)
    return MappingProxyType({name: frozenset(alts) for name, alts in table.items()})


NAME_VARIATIONS: Mapping[str, frozenset[str]] = _build_variation_table(_NICKNAME_TO_CANONICAL)
