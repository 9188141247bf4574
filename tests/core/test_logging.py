import io
import json
import logging
from unittest.mock import patch

import pytest
from depsort.core.logging import JSONFormatter, RunIdFilter, get_run_id, setup_logging, timed


def test_run_id_is_stable():
    assert get_run_id() == get_run_id()
    assert len(get_run_id()) == 8


def test_json_formatter_includes_extra_fields():
    record = logging.LogRecord('depsort', logging.ERROR, __file__, 1,
                               'dependency cycle detected', None, None)
    record.cycle = ['a', 'b', 'a']

    entry = json.loads(JSONFormatter().format(record))

    assert entry['level'] == 'ERROR'
    assert entry['message'] == 'dependency cycle detected'
    assert entry['cycle'] == ['a', 'b', 'a']
    assert entry['run_id'] == get_run_id()
    assert 'node' not in entry


@pytest.mark.parametrize("verbosity, level", [
    (0, logging.WARNING),
    (1, logging.INFO),
    (2, logging.DEBUG),
    (5, logging.DEBUG),
])
def test_setup_logging_levels(verbosity, level):
    setup_logging(verbosity=verbosity)
    assert logging.getLogger().level == level


def test_setup_logging_json_handler():
    handler = setup_logging(json_format=True)

    assert logging.getLogger().handlers == [handler]
    assert isinstance(handler.formatter, JSONFormatter)


def test_plain_lines_carry_run_id():
    stream = io.StringIO()
    setup_logging(stream=stream)

    logging.warning('dependency cycle detected')

    line = stream.getvalue().strip()
    assert f"[WARNING] [{get_run_id()}] dependency cycle detected" in line


def test_json_lines_carry_resolution_extras():
    stream = io.StringIO()
    setup_logging(verbosity=2, json_format=True, stream=stream)

    logging.debug('Resolved calculus', extra={'node': 'calculus'})

    entry = json.loads(stream.getvalue())
    assert entry['node'] == 'calculus'
    assert entry['run_id'] == get_run_id()


def test_run_id_filter_passes_records():
    record = logging.LogRecord('depsort', logging.INFO, __file__, 1, 'msg', None, None)

    assert RunIdFilter().filter(record)
    assert record.run_id == get_run_id()


def test_timed_logs_elapsed():
    @timed
    def work():
        return 42

    with patch('logging.info') as mock_info:
        assert work() == 42

    assert mock_info.call_count == 1
    assert 'work took' in mock_info.call_args[0][0]


def test_timed_logs_when_call_fails():
    @timed
    def broken():
        raise ValueError('boom')

    with patch('logging.info') as mock_info:
        with pytest.raises(ValueError):
            broken()

    assert 'broken took' in mock_info.call_args[0][0]
