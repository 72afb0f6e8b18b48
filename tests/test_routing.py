import asyncio

import pytest

from quizgrader.core.routing import Router, compile_pattern


async def handler_a(params):
    return ("a", params)


async def handler_b(params):
    return ("b", params)


def test_get_pattern_binds_id():
    router = Router()
    router.get("/questions/:id", handler_a)

    found = router.match("GET", "/questions/q1")
    assert found is not None
    assert found.params == {"id": "q1"}
    assert found.handler is handler_a


def test_method_mismatch_is_no_route():
    router = Router()
    router.get("/questions/:id", handler_a)

    assert router.match("POST", "/questions/q1") is None


def test_segment_count_must_match():
    router = Router()
    router.get("/questions/:id", handler_a)

    assert router.match("GET", "/questions") is None
    assert router.match("GET", "/questions/q1/answer") is None
    assert router.match("GET", "/questions/q1/") is None


def test_literal_segments_must_match():
    router = Router()
    router.post("/questions/:id/answer", handler_a)

    assert router.match("POST", "/questions/q1/answers") is None
    assert router.match("POST", "/quizzes/q1/answer") is None
    assert router.match("POST", "/questions/q1/answer").params == {"id": "q1"}


def test_parameter_needs_non_empty_segment():
    router = Router()
    router.get("/questions/:id", handler_a)

    assert router.match("GET", "/questions/") is None


def test_first_registered_route_wins():
    router = Router()
    router.get("/questions/:id", handler_a)
    router.get("/questions/special", handler_b)

    assert router.match("GET", "/questions/special").handler is handler_a


def test_method_is_case_insensitive():
    router = Router()
    router.register("get", "/questions/:id", handler_a)

    assert router.match("GET", "/questions/q1") is not None


def test_parameter_values_are_not_validated():
    router = Router()
    router.get("/questions/:id", handler_a)

    assert router.match("GET", "/questions/%%bad id").params == {"id": "%%bad id"}


def test_dispatch_calls_handler_with_params():
    router = Router()
    router.get("/questions/:id", handler_a)
    router.post("/questions/:id/answer", handler_b)

    assert asyncio.run(router.dispatch("POST", "/questions/q7/answer")) == ("b", {"id": "q7"})
    assert asyncio.run(router.dispatch("GET", "/nowhere")) is None


def test_compile_pattern_rejects_empty_parameter_name():
    with pytest.raises(ValueError):
        compile_pattern("/questions/:")


def test_compile_pattern_segments():
    segments = compile_pattern("/questions/:id/answer")
    assert [(s.kind, s.value) for s in segments] == [
        ("literal", "questions"),
        ("parameter", "id"),
        ("literal", "answer"),
    ]


def test_dispatch_reports_match_before_handler_runs():
    router = Router()
    router.post("/questions/:id/answer", handler_b)
    seen = []

    result = asyncio.run(
        router.dispatch("POST", "/questions/q3/answer", on_match=lambda found: seen.append(found))
    )

    assert result == ("b", {"id": "q3"})
    assert [(m.route.pattern, m.params) for m in seen] == [("/questions/:id/answer", {"id": "q3"})]


def test_dispatch_skips_hook_without_match():
    router = Router()
    router.get("/questions/:id", handler_a)
    seen = []

    assert asyncio.run(router.dispatch("GET", "/other", on_match=seen.append)) is None
    assert seen == []
