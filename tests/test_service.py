import asyncio

import pytest

from framecheck.checks import CheckStatus
from framecheck.errors import UnknownProjectError, UnknownReferenceError
from framecheck import service as service_module
from framecheck.service import AnalysisService
from framecheck.store import ResultStore


def test_analyze_stores_results(cantilever):
    service = AnalysisService()
    service.set_model('p1', cantilever())

    results = asyncio.run(service.analyze('p1', 'ULS1'))

    assert service.results('p1') == results
    assert [r.element_id for r in results] == ['E1']


def test_rerun_replaces_results(portal):
    service = AnalysisService()
    service.set_model('p1', portal())

    async def run():
        await service.analyze('p1', 'ULS1')
        return await service.analyze('p1', 'ULS2')

    second = asyncio.run(run())

    stored = service.results('p1')
    assert len(stored) == 3
    assert stored == second
    assert {r.combination_id for r in stored} == {'ULS2'}


def test_identical_runs_leave_identical_store(portal):
    service = AnalysisService()
    service.set_model('p1', portal())

    asyncio.run(service.analyze('p1', 'ULS2'))
    first = service.results('p1')
    asyncio.run(service.analyze('p1', 'ULS2'))

    assert service.results('p1') == first


def test_concurrent_projects_do_not_interfere(cantilever, portal):
    service = AnalysisService()
    service.set_model('a', cantilever())
    service.set_model('b', portal())

    async def run():
        return await asyncio.gather(
            service.analyze('a', 'ULS1'),
            service.analyze('b', 'ULS2'),
            service.analyze('b', 'ULS2'),
        )

    a, b1, b2 = asyncio.run(run())

    assert len(a) == 1 and len(b1) == 3
    assert b1 == b2
    assert service.results('a') == a
    assert service.results('b') == b2


def test_check_design_after_analysis(cantilever):
    service = AnalysisService()
    service.set_model('p1', cantilever())

    async def run():
        await service.analyze('p1', 'ULS1')
        return await service.check_design('p1', 'E1', 'EC3')

    design = asyncio.run(run())

    assert design.element_id == 'E1'
    assert design.overall_status in (CheckStatus.PASS, CheckStatus.FAIL)
    assert service.store.get_design('p1') == [design]


def test_check_design_needs_results(cantilever):
    service = AnalysisService()
    service.set_model('p1', cantilever())

    with pytest.raises(UnknownReferenceError):
        asyncio.run(service.check_design('p1', 'E1', 'AISC360'))


def test_unknown_project():
    service = AnalysisService()

    with pytest.raises(UnknownProjectError):
        asyncio.run(service.analyze('ghost', 'ULS1'))
    with pytest.raises(KeyError):
        service.results('ghost')


def test_store_replace_and_clear(cantilever):
    store = ResultStore()
    service = AnalysisService(store)
    service.set_model('p1', cantilever())
    asyncio.run(service.analyze('p1', 'ULS1'))
    results = store.get('p1')

    store.replace('p1', results)
    store.replace('p1', results)
    assert store.get('p1') == results

    # Returned lists are copies
    store.get('p1').clear()
    assert len(store.get('p1')) == 1

    store.clear('p1')
    assert store.get('p1') == []
    store.replace('p2', results)
    store.clear()
    assert store.get('p2') == []


def test_new_model_drops_old_results(cantilever, portal):
    service = AnalysisService()
    service.set_model('p1', cantilever())
    asyncio.run(service.analyze('p1', 'ULS1'))

    service.set_model('p1', portal())

    assert service.results('p1') == []


def test_model_replaced_mid_run_does_not_store_old_results(cantilever, portal, monkeypatch):
    service = AnalysisService()
    service.set_model('p1', portal())
    real_analyze = service_module.analyze

    def analyze_then_replace(model, combination_id, config):
        results = real_analyze(model, combination_id, config)
        service.set_model('p1', cantilever())
        return results

    monkeypatch.setattr(service_module, 'analyze', analyze_then_replace)
    results = asyncio.run(service.analyze('p1', 'ULS1'))
    monkeypatch.undo()

    assert [r.element_id for r in results] == ['C1', 'B1', 'C2']
    assert list(service.model('p1').elements) == ['E1']
    assert service.results('p1') == []

    # A run on the current model is stored as usual
    asyncio.run(service.analyze('p1', 'ULS1'))
    assert [r.element_id for r in service.results('p1')] == ['E1']


def test_forget_drops_model_results_and_lock(cantilever):
    service = AnalysisService()
    service.set_model('p1', cantilever())
    asyncio.run(service.analyze('p1', 'ULS1'))

    service.forget('p1')

    assert 'p1' not in service._locks
    assert service.store.get('p1') == []
    with pytest.raises(UnknownProjectError):
        service.results('p1')
    with pytest.raises(UnknownProjectError):
        service.forget('p1')
