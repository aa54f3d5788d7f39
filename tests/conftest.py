import pytest

# 21 words
RATE_HIKE = (
    "The central bank raised interest rates by half a point on Tuesday, "
    "surprising most analysts who had expected a smaller move."
)
# 13 words, opens with a transition starter
RECOVERY = "However, markets recovered most of their losses within an hour of the announcement."
# 8 words, opens with a transition starter
SHORT_RECOVERY = "However, markets recovered their losses within an hour."
# 16 words
YIELDS = "Bond yields climbed to their highest level in more than a decade as traders repriced risk."
# 7 words
BONDS_FLAT = "Bonds were little changed after the decision."
# 13 words
LAST_HIKE = "Analysts said the move would likely be the last one of this cycle."


@pytest.fixture
def rate_hike():
    return RATE_HIKE


@pytest.fixture
def recovery():
    return RECOVERY


@pytest.fixture
def article_text():
    return (
        f"{RATE_HIKE} {RECOVERY}\n\n"
        f"{YIELDS} {BONDS_FLAT}\n\n"
        "In conclusion, the decision reshaped expectations for the year."
    )


@pytest.fixture
def write_text(tmp_path):
    def _write(name: str, content: str):
        p = tmp_path / name
        p.write_text(content, encoding="utf-8")
        return p
    return _write
