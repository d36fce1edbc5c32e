import pytest

from core import lexicon_repo
from core.schemas import CardKind
from core.srs.identity import identify


WORDS_CSV = """\
Niveau 1;;
Thématique 1 - La famille;;
Partie 1;;
أب;آباء;père
أم;أمهات;mère

Partie 2;;
أخ;إخوة;frère
;;
Thématique 2 - La maison;;
Partie 1;;
بيت;بيوت;maison
Niveau 2;;
Thématique 1 - Le travail;;
Partie 1;;
مكتب;مكاتب;bureau
"""

VERBS_CSV = """\
Niveau 1;;;;
Thématique 3 - Les verbes;;;;
Partie 1;;;;
كتب;يكتب;اكتب;كتابة;écrire
قرأ;يقرأ;اقرأ;قراءة;lire
ذهب;يذهب;اذهب
"""


@pytest.fixture
def word_entries():
    return lexicon_repo.parse_vocabulary_csv(WORDS_CSV, CardKind.WORD)


def test_parse_words_tracks_sections(word_entries):
    assert [entry.headword for entry in word_entries] == ["أب", "أم", "أخ", "بيت", "مكتب"]

    brother = word_entries[2]
    assert brother.level == "Niveau 1"
    assert brother.theme == "Thématique 1 - La famille"
    assert brother.part == "Partie 2"
    assert brother.plural == "إخوة"
    assert brother.translation == "frère"

    assert word_entries[4].level == "Niveau 2"


def test_parse_verbs_skips_short_rows():
    entries = lexicon_repo.parse_vocabulary_csv(VERBS_CSV, "verb")

    assert [entry.headword for entry in entries] == ["كتب", "قرأ"]
    write = entries[0]
    assert write.kind == "verb"
    assert (write.present, write.imperative, write.masdar, write.translation) == ("يكتب", "اكتب", "كتابة", "écrire")


def test_rows_before_sections_are_ignored():
    assert lexicon_repo.parse_vocabulary_csv("أب;آباء;père\n", CardKind.WORD) == []


def test_numbers_cannot_be_parsed():
    with pytest.raises(ValueError):
        lexicon_repo.parse_vocabulary_csv(WORDS_CSV, CardKind.NUMBER)


def test_load_vocabulary_file_handles_bom(tmp_path):
    path = tmp_path / "mots.csv"
    path.write_text(WORDS_CSV, encoding="utf-8-sig")
    entries = lexicon_repo.load_vocabulary_file(path, CardKind.WORD)
    assert len(entries) == 5
    assert entries[0].level == "Niveau 1"


def test_hierarchy(word_entries):
    assert lexicon_repo.build_hierarchy(word_entries) == {
        "Niveau 1": {
            "Thématique 1 - La famille": ["Partie 1", "Partie 2"],
            "Thématique 2 - La maison": ["Partie 1"],
        },
        "Niveau 2": {"Thématique 1 - Le travail": ["Partie 1"]},
    }


def test_filter_by_parts(word_entries):
    key = lexicon_repo.part_key(word_entries[0])
    assert key == "Niveau 1|Thématique 1 - La famille|Partie 1"
    selected = lexicon_repo.filter_by_parts(word_entries, [key])
    assert [entry.headword for entry in selected] == ["أب", "أم"]


def test_themes_and_custom_selection(word_entries):
    themes = lexicon_repo.list_themes(word_entries)
    assert "Niveau 1 - Thématique 2 - La maison" in themes
    assert len(themes) == 3

    family = lexicon_repo.entries_for_theme(word_entries, "Niveau 1 - Thématique 1 - La famille")
    assert len(family) == 3

    picked = lexicon_repo.filter_by_identities(word_entries, [identify(word_entries[3]), identify(word_entries[0])])
    assert [entry.headword for entry in picked] == ["أب", "بيت"]


def test_summarize_selection(word_entries):
    keys = {lexicon_repo.part_key(entry) for entry in word_entries}
    assert lexicon_repo.summarize_selection(keys) == {"levels": 2, "themes": 3, "parts": 4}
