"""
Shared fixtures: every store points at tmp_path, bundled words come from a
small asset directory written per test.
"""

import json
from dataclasses import replace

import pytest

from eunoia.config import Settings
from eunoia.db.database import init_db
from eunoia.web.dependencies import build_services

IDIOMS = [
    ("가화만사성", "집안이 화목하면 모든 일이 잘 이루어짐"),
    ("각골난망", "은혜를 뼈에 새길 만큼 잊지 않음"),
    ("감언이설", "달콤한 말과 이로운 조건으로 꾀는 말"),
    ("고진감래", "고생 끝에 낙이 옴"),
    ("과유불급", "지나침은 미치지 못함과 같음"),
    ("금상첨화", "좋은 일에 좋은 일이 더함"),
    ("새옹지마", "인생의 길흉화복은 예측하기 어려움"),
]

ENGLISH = [
    ("candid", "솔직한"),
    ("diligent", "근면한"),
]


def _write_asset(directory, key, display_name, pairs):
    payload = {
        "category": display_name,
        "words": [{"word": w, "meaning": m, "category": display_name, "source": "asset"} for w, m in pairs],
    }
    (directory / f"{key}.json").write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")


@pytest.fixture
def asset_dir(tmp_path):
    directory = tmp_path / "assets"
    directory.mkdir()
    _write_asset(directory, "idiom", "사자성어", IDIOMS)
    _write_asset(directory, "english", "영어", ENGLISH)
    # proverb and word deliberately have no bundled file.
    return directory


@pytest.fixture
def settings(tmp_path, asset_dir):
    return replace(
        Settings(),
        DB_PATH=tmp_path / "eunoia.db",
        DATA_DIR=tmp_path / "word_data",
        ASSET_DIR=asset_dir,
        ENABLE_SCHEDULER=False,
    )


@pytest.fixture
def services(settings):
    init_db(settings)
    return build_services(settings)


@pytest.fixture
def categories(services):
    return services.categories


@pytest.fixture
def history_repo(services):
    return services.history.repo


@pytest.fixture
def ledger_repo(services):
    return services.quiz.ledger_repo


@pytest.fixture
def record_repo(services):
    return services.categories.record_repo


@pytest.fixture
def bundled_idioms():
    return list(IDIOMS)
