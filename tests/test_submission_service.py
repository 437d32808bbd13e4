import pytest

from vocabpractice_app.core.error_handlers import StoreError, ValidationError
from vocabpractice_app.models import Answer, Submission
from vocabpractice_app.modules.practice.services.submission_service import SubmissionService


def test_submit_stores_submission_and_answers_in_order(app, word_set):
    apple, banana = word_set.words

    submission = SubmissionService().submit(
        word_set.id, ' Sarah Johnson ', [(apple.id, ' I like apples. '), (banana.id, 'Bananas!')]
    )

    assert submission.student_name == 'Sarah Johnson'
    answers = Answer.query.filter_by(submission_id=submission.id).order_by(Answer.id).all()
    assert [(a.word_id, a.sentence) for a in answers] == [
        (apple.id, 'I like apples.'),
        (banana.id, 'Bananas!'),
    ]


@pytest.mark.parametrize('answers', [
    [],
    [(1, 'ok'), (1, 'again')],
    [(1, '   ')],
])
def test_validate_answers_rejects_bad_input(app, answers):
    with pytest.raises(ValidationError):
        SubmissionService.validate_answers(answers)


def test_validate_answers_requires_expected_order(app):
    with pytest.raises(ValidationError):
        SubmissionService.validate_answers([(2, 'b'), (1, 'a')], expected_word_ids=[1, 2])

    parsed = SubmissionService.validate_answers([(1, 'a'), (2, 'b')], expected_word_ids=[1, 2])
    assert [answer.word_id for answer in parsed] == [1, 2]


def test_submit_requires_student_name(app, word_set):
    with pytest.raises(ValidationError):
        SubmissionService().submit(word_set.id, '  ', [(word_set.words[0].id, 'A sentence.')])

    assert Submission.query.count() == 0


def test_submit_with_unknown_word_leaves_nothing_behind(app, word_set):
    with pytest.raises(StoreError):
        SubmissionService().submit(word_set.id, 'Sam', [(9999, 'No such word.')])

    assert Submission.query.count() == 0
    assert Answer.query.count() == 0
