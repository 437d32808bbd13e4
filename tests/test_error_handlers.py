import logging

import pytest

from vocabpractice_app.core.error_handlers import (
    NotFoundError,
    StoreError,
    SubmitError,
    ValidationError,
    WizardStateError,
    error_response,
    success_response,
)
from vocabpractice_app.core.logging_config import LOG_FORMAT, setup_logging


def test_error_to_dict():
    error = ValidationError('Title missing', errors={'title': ['required']})

    assert error.status_code == 400
    assert error.to_dict() == {
        'success': False,
        'message': 'Title missing',
        'code': 'VALIDATION_ERROR',
        'details': {'errors': {'title': ['required']}},
    }


@pytest.mark.parametrize('error, status, code', [
    (NotFoundError(), 404, 'NOT_FOUND'),
    (StoreError(operation='delete_word_set'), 503, 'STORE_ERROR'),
    (SubmitError(), 503, 'SUBMIT_FAILED'),
    (WizardStateError(step='complete'), 409, 'INVALID_STEP'),
])
def test_error_codes(error, status, code):
    assert (error.status_code, error.code) == (status, code)


def test_submit_error_is_a_store_error():
    assert isinstance(SubmitError(), StoreError)
    assert SubmitError().message == 'Failed to submit answers'


def test_response_helpers(app):
    assert success_response({'id': 1}, 'ok') == {'success': True, 'data': {'id': 1}, 'message': 'ok'}

    with app.test_request_context():
        response, status = error_response('Nope', 'BAD', 422)
    assert status == 422
    assert response.get_json() == {'success': False, 'message': 'Nope', 'code': 'BAD'}


def test_unknown_page_renders_html_not_found(client):
    response = client.get('/no-such-page')

    assert response.status_code == 404
    assert b'Not found' in response.data


def test_app_errors_render_error_page(app, client):
    @app.route('/boom')
    def boom():
        raise StoreError('Failed to load word sets')

    response = client.get('/boom')

    assert response.status_code == 503
    assert b'Failed to load word sets' in response.data


def test_setup_logging_adds_console_and_file_handlers(tmp_path):
    logger = logging.getLogger('vocabpractice-test')
    logger.handlers.clear()

    setup_logging(logger, 'DEBUG', str(tmp_path))

    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2
    assert all(handler.formatter._fmt == LOG_FORMAT for handler in logger.handlers)
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
