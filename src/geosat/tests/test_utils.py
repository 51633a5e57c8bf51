import logging

from geosat import utils


def test_safe_log_exception_with_context(caplog):
    with caplog.at_level(logging.ERROR, logger='geosat.utils'):
        utils.safe_log_exception('cannot dump images', ValueError('boom'), file='x.h5')
    assert "cannot dump images | boom | file='x.h5'" in caplog.text


def test_safe_log_exception_fallback(capfd):
    class BadLogger:
        def error(self, *args, **kwargs):
            raise RuntimeError('logger failed')

    old_logger = utils.logger
    try:
        utils.logger = BadLogger()
        utils.safe_log_exception('test message', ValueError('boom'))
        captured = capfd.readouterr()
        assert 'LOGGING FAILURE' in captured.err
    finally:
        utils.logger = old_logger
