import pytest
from sqlalchemy.exc import SQLAlchemyError

from vocabpractice_app.core.error_handlers import NotFoundError, StoreError, ValidationError
from vocabpractice_app.core.signals import word_set_created, words_replaced
from vocabpractice_app.models import Answer, Submission, Word, WordSet, db
from vocabpractice_app.modules.practice.services.submission_service import SubmissionService
from vocabpractice_app.modules.word_sets.services.word_set_service import WordSetService


def _stored_words(word_set_id):
    words = Word.query.filter_by(word_set_id=word_set_id).order_by(Word.position).all()
    return [(w.position, w.word) for w in words]


def test_create_word_set_drops_blank_words(app, teacher):
    detail = WordSetService().create_word_set(teacher.id, 'Lesson 1', ['apple', '', 'banana'])

    assert detail.title == 'Lesson 1'
    assert [(w.position, w.word) for w in detail.words] == [(0, 'apple'), (1, 'banana')]
    assert _stored_words(detail.id) == [(0, 'apple'), (1, 'banana')]


def test_create_word_set_trims_title_and_words(app, teacher):
    detail = WordSetService().create_word_set(teacher.id, '  Animals  ', ['  cat ', '   ', 'dog'])

    assert detail.title == 'Animals'
    assert _stored_words(detail.id) == [(0, 'cat'), (1, 'dog')]


@pytest.mark.parametrize('title, words', [
    ('', ['apple']),
    ('   ', ['apple']),
    ('Lesson 1', []),
    ('Lesson 1', ['', '  ']),
])
def test_create_word_set_requires_title_and_a_word(app, teacher, title, words):
    with pytest.raises(ValidationError):
        WordSetService().create_word_set(teacher.id, title, words)

    assert WordSet.query.count() == 0
    assert Word.query.count() == 0


def test_create_word_set_rejects_too_long_word(app, teacher):
    app.config['WORD_MAX_LENGTH'] = 5
    with pytest.raises(ValidationError):
        WordSetService().create_word_set(teacher.id, 'Lesson', ['short', 'toolongword'])
    assert WordSet.query.count() == 0


def test_create_word_set_sends_signal(app, teacher):
    received = []

    def _listener(sender, **payload):
        received.append(payload)

    word_set_created.connect(_listener)
    try:
        detail = WordSetService().create_word_set(teacher.id, 'Lesson 1', ['apple'])
    finally:
        word_set_created.disconnect(_listener)

    assert received == [{
        'teacher_id': teacher.id,
        'word_set_id': detail.id,
        'title': 'Lesson 1',
        'word_count': 1,
    }]


def test_create_word_set_rolls_back_when_words_fail(app, teacher, monkeypatch):
    service = WordSetService()

    def _reject(word_set_id, words):
        raise SQLAlchemyError('insert rejected')

    monkeypatch.setattr(service.store, 'insert_words', _reject)

    with pytest.raises(StoreError):
        service.create_word_set(teacher.id, 'Lesson 1', ['apple'])

    assert WordSet.query.count() == 0


def test_dashboard_lists_own_sets_newest_first_with_counts(app, make_word_set, teacher, other_teacher):
    first = make_word_set(teacher, title='First', words=['a', 'b', 'c'])
    second = make_word_set(teacher, title='Second', words=['d'])
    make_word_set(other_teacher, title='Not mine', words=['x'])
    SubmissionService().submit(first.id, 'Sarah Johnson', [
        (w.id, f'Sentence {w.word}') for w in first.words
    ])

    rows = WordSetService().list_dashboard(teacher.id)

    assert [row.title for row in rows] == ['Second', 'First']
    assert [(row.word_count, row.submission_count) for row in rows] == [(1, 0), (3, 1)]
    assert rows[0].id == second.id


def test_dashboard_is_empty_for_new_teacher(app, teacher):
    assert WordSetService().list_dashboard(teacher.id) == []


def test_load_detail_of_other_teachers_set_is_not_found(app, make_word_set, teacher, other_teacher):
    foreign = make_word_set(other_teacher, title='Not mine')

    with pytest.raises(NotFoundError):
        WordSetService().load_detail(teacher.id, foreign.id)


def test_load_detail_of_missing_set_is_not_found(app, teacher):
    with pytest.raises(NotFoundError):
        WordSetService().load_detail(teacher.id, 999)


def test_replace_words_renumbers_from_zero(app, make_word_set, teacher):
    word_set = make_word_set(teacher, words=['x', 'y'])
    old_ids = {w.id for w in word_set.words}

    new_words = WordSetService().replace_words(teacher.id, word_set.id, ['y', 'z', 'w'])

    assert [(w.position, w.word) for w in new_words] == [(0, 'y'), (1, 'z'), (2, 'w')]
    assert _stored_words(word_set.id) == [(0, 'y'), (1, 'z'), (2, 'w')]
    assert Word.query.filter(Word.id.in_(old_ids)).count() == 0


def test_replace_words_twice_is_stable(app, make_word_set, teacher):
    word_set = make_word_set(teacher, words=['x'])
    service = WordSetService()

    service.replace_words(teacher.id, word_set.id, ['one', '', 'two'])
    first = _stored_words(word_set.id)
    service.replace_words(teacher.id, word_set.id, ['one', '', 'two'])

    assert _stored_words(word_set.id) == first == [(0, 'one'), (1, 'two')]


def test_replace_words_with_only_blanks_keeps_old_list(app, make_word_set, teacher):
    word_set = make_word_set(teacher, words=['x', 'y'])

    with pytest.raises(ValidationError):
        WordSetService().replace_words(teacher.id, word_set.id, ['', '   '])

    assert _stored_words(word_set.id) == [(0, 'x'), (1, 'y')]


def test_replace_words_failure_keeps_old_list(app, make_word_set, teacher, monkeypatch):
    word_set = make_word_set(teacher, words=['x', 'y'])
    service = WordSetService()

    def _reject(word_set_id, words):
        raise SQLAlchemyError('insert rejected')

    monkeypatch.setattr(service.store, 'insert_words', _reject)

    with pytest.raises(StoreError):
        service.replace_words(teacher.id, word_set.id, ['z'])

    assert _stored_words(word_set.id) == [(0, 'x'), (1, 'y')]


def test_replace_words_removes_answers_of_replaced_words(app, make_word_set, teacher):
    word_set = make_word_set(teacher, words=['x', 'y'])
    SubmissionService().submit(word_set.id, 'Sam', [(w.id, 'A sentence.') for w in word_set.words])
    assert Answer.query.count() == 2

    received = []

    def _listener(sender, **payload):
        received.append(payload['word_count'])

    words_replaced.connect(_listener)
    try:
        WordSetService().replace_words(teacher.id, word_set.id, ['z'])
    finally:
        words_replaced.disconnect(_listener)

    assert Answer.query.count() == 0
    assert Submission.query.count() == 1
    assert received == [1]


def test_replace_words_of_other_teachers_set_is_not_found(app, make_word_set, teacher, other_teacher):
    foreign = make_word_set(other_teacher, words=['x'])

    with pytest.raises(NotFoundError):
        WordSetService().replace_words(teacher.id, foreign.id, ['y'])

    assert _stored_words(foreign.id) == [(0, 'x')]


def test_delete_word_set_cascades(app, make_word_set, teacher):
    word_set = make_word_set(teacher, words=['x', 'y'])
    word_set_id = word_set.id
    SubmissionService().submit(word_set_id, 'Sam', [(w.id, 'A sentence.') for w in word_set.words])
    service = WordSetService()

    service.delete_word_set(teacher.id, word_set_id)

    assert service.list_dashboard(teacher.id) == []
    assert Word.query.count() == 0
    assert Submission.query.count() == 0
    assert Answer.query.count() == 0
    with pytest.raises(NotFoundError):
        service.load_detail(teacher.id, word_set_id)


def test_delete_other_teachers_set_is_not_found(app, make_word_set, teacher, other_teacher):
    foreign = make_word_set(other_teacher)

    with pytest.raises(NotFoundError):
        WordSetService().delete_word_set(teacher.id, foreign.id)

    assert db.session.get(WordSet, foreign.id) is not None


def test_restart_student_removes_only_that_student(app, teacher, word_set):
    submissions = SubmissionService()
    answers = [(w.id, 'A sentence.') for w in word_set.words]
    submissions.submit(word_set.id, 'Sarah Johnson', answers)
    submissions.submit(word_set.id, 'Sarah Johnson', answers)
    submissions.submit(word_set.id, 'Tom', answers)
    service = WordSetService()

    deleted = service.restart_student(teacher.id, word_set.id, 'Sarah Johnson')

    assert deleted == 2
    detail = service.load_detail(teacher.id, word_set.id)
    assert [s.student_name for s in detail.submissions] == ['Tom']
    review = service.student_answers(teacher.id, word_set.id, 'Sarah Johnson')
    assert review.has_submission is False
    assert review.answers == []
    assert Answer.query.count() == 2


def test_restart_unknown_student_deletes_nothing(app, teacher, word_set):
    assert WordSetService().restart_student(teacher.id, word_set.id, 'Nobody') == 0


def test_student_answers_shows_latest_submission_in_answer_order(app, make_word_set, teacher):
    word_set = make_word_set(teacher, words=['apple', 'banana'])
    apple, banana = word_set.words
    submissions = SubmissionService()
    submissions.submit(word_set.id, 'Sarah Johnson', [(apple.id, 'Old apple.'), (banana.id, 'Old banana.')])
    latest = submissions.submit(word_set.id, 'Sarah Johnson', [(apple.id, 'New apple.'), (banana.id, 'New banana.')])

    review = WordSetService().student_answers(teacher.id, word_set.id, 'Sarah Johnson')

    assert review.submission_id == latest.id
    assert [(a.word, a.sentence) for a in review.answers] == [
        ('apple', 'New apple.'),
        ('banana', 'New banana.'),
    ]


def test_detail_groups_submissions_per_student(app, teacher, word_set):
    answers = [(w.id, 'A sentence.') for w in word_set.words]
    submissions = SubmissionService()
    submissions.submit(word_set.id, 'Sarah Johnson', answers)
    submissions.submit(word_set.id, 'Tom', answers)
    latest_sarah = submissions.submit(word_set.id, 'Sarah Johnson', answers)

    detail = WordSetService().load_detail(teacher.id, word_set.id)

    assert len(detail.submissions) == 3
    students = detail.students
    assert [s.student_name for s in students] == ['Sarah Johnson', 'Tom']
    assert students[0].attempt_count == 2
    assert students[0].latest_submission_id == latest_sarah.id
