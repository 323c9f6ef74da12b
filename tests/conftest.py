"""
pytest 공통 fixture 정의
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from unittest.mock import create_autospec

from elasticsearch import Elasticsearch
from elasticsearch.client import IndicesClient

import scout.config
import scout.events
from scout.config import ScoutConfig
from scout.engines.capability import ServerCapability
from scout.engines.es_engine import ElasticsearchEngine

from fakes import FakeUser


@pytest.fixture(autouse=True)
def scout_config(monkeypatch):
    """환경변수와 무관한 고정 설정"""
    config = ScoutConfig(
        hosts="http://localhost:9200",
        index=None,
        prefix="",
        chunk_size=2,
        timeout=5,
        number_of_shards=3,
        number_of_replicas=2,
    )
    monkeypatch.setattr(scout.config, "_config", config)
    monkeypatch.setattr(scout.config, "_es_client", None)
    monkeypatch.setattr(scout.config, "_engine", None)
    monkeypatch.setattr(scout.events, "_dispatcher", None)
    return config


@pytest.fixture
def es_client():
    """Elasticsearch 클라이언트 Mock (실제 클라이언트 메서드 시그니처 검사)"""
    client = create_autospec(Elasticsearch, instance=True)
    client.indices = create_autospec(IndicesClient, instance=True)
    client.info.return_value = {"version": {"number": "7.10.0"}}
    client.bulk.return_value = {"errors": False, "items": []}
    client.indices.exists.return_value = False
    client.search.return_value = {"hits": {"total": {"value": 0, "relation": "eq"}, "hits": []}}
    return client


@pytest.fixture
def engine(es_client):
    """modern 방식 엔진 (공유 인덱스 없음)"""
    return ElasticsearchEngine(es_client)


@pytest.fixture
def legacy_engine(es_client):
    """legacy 방식 엔진 (ES 6.8)"""
    return ElasticsearchEngine(es_client, index="app", capability=ServerCapability("6.8.0"))


@pytest.fixture
def users(engine):
    """인메모리 사용자 3명"""
    FakeUser.reset(engine)
    FakeUser.create(1, name="alice", status="active", age=30)
    FakeUser.create(2, name="bob", status="inactive", age=25)
    FakeUser.create(3, name="carol", status="active", age=41)
    yield [FakeUser.registry[k] for k in (1, 2, 3)]
    FakeUser.reset()


def make_result(ids, total=None, legacy_total=False):
    """ES 검색 응답 생성"""
    total = len(ids) if total is None else total
    return {
        "hits": {
            "total": total if legacy_total else {"value": total, "relation": "eq"},
            "hits": [{"_id": str(i), "_index": "users", "_score": 1.0, "_source": {}} for i in ids],
        }
    }


@pytest.fixture
def result_factory():
    return make_result
