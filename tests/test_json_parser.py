"""Tests for recovering ranked id arrays from model replies."""

import pytest

from news_dashboard.exceptions import RankingParseError
from news_dashboard.llm.json_parser import parse_ranked_ids


@pytest.mark.parametrize(
    "content,expected",
    [
        ("[3, 0, 7, 1, 12]", [3, 0, 7, 1, 12]),
        ("  [4,2]\n", [4, 2]),
        ("Here are the most important stories: [5, 2, 9]. Hope this helps!", [5, 2, 9]),
        ("```json\n[1, 2, 3]\n```", [1, 2, 3]),
        ("```\n[8, 6]\n```", [8, 6]),
        ("Sure!\n```json\n[0, 4]\n```\nLet me know.", [0, 4]),
        ('{"rankedIds": [2, 1, 0]}', [2, 1, 0]),
        ("Ranking [draft]: [3, 1]", [3, 1]),
        ("[[1, 2]] or maybe [4]", [1, 2]),
        ('["7", "3"]', [7, 3]),
        ("[1.0, 2]", [1, 2]),
        ("[true, 3, null, \"x\", 2.5, 4]", [3, 4]),
        ('Titles ["a]b", "c"] then [6, 5]', [6, 5]),
        ("[]", []),
        ("No ranking possible: []", []),
    ],
)
def test_parse_ranked_ids(content, expected):
    assert parse_ranked_ids(content) == expected


def test_parse_ranked_ids_keeps_duplicates_and_negatives_for_caller():
    # Range and duplicate checks belong to the ranking merge step
    assert parse_ranked_ids("[2, 2, -1]") == [2, 2, -1]


@pytest.mark.parametrize(
    "content",
    [
        "",
        "   ",
        None,
        "I cannot rank these articles.",
        "[1, 2",
        "{\"ids\": \"1,2\"}",
        "```json\n{\"top\": 1}\n```",
    ],
)
def test_parse_ranked_ids_rejects_replies_without_array(content):
    with pytest.raises(RankingParseError):
        parse_ranked_ids(content)
