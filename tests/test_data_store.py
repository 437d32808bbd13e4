import pytest
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from vocabpractice_app.core.error_handlers import StoreError
from vocabpractice_app.models import Teacher, Word, WordSet
from vocabpractice_app.services.data_store import DataStore
from vocabpractice_app.utils import db_session


def test_list_teachers_is_sorted_by_name(app, make_teacher):
    make_teacher(full_name='Zoe Park', email='zoe@example.com')
    make_teacher(full_name='Anna Bell', email='anna@example.com')

    assert [t.full_name for t in DataStore().list_teachers()] == ['Anna Bell', 'Zoe Park']


def test_insert_words_assigns_positions(app, teacher):
    store = DataStore()

    def _work():
        word_set = store.insert_word_set(teacher.id, 'Colours')
        store.insert_words(word_set.id, ['red', 'green', 'blue'])
        return word_set.id

    word_set_id = store.transaction('create_word_set', _work)

    assert [(w.position, w.word) for w in store.list_words(word_set_id)] == [
        (0, 'red'), (1, 'green'), (2, 'blue'),
    ]


def test_counts_include_sets_without_rows(app, make_word_set, teacher):
    full = make_word_set(teacher, words=['a', 'b'])
    empty = make_word_set(teacher, title='Empty', words=())
    store = DataStore()

    assert store.count_words_by_set([full.id, empty.id]) == {full.id: 2, empty.id: 0}
    assert store.count_submissions_by_set([full.id, empty.id]) == {full.id: 0, empty.id: 0}
    assert store.count_words_by_set([]) == {}


def test_transaction_rolls_back_and_raises_store_error(app, teacher):
    store = DataStore()

    def _work():
        store.insert_word_set(teacher.id, 'Half written')
        raise SQLAlchemyError('boom')

    with pytest.raises(StoreError) as excinfo:
        store.transaction('create_word_set', _work)

    assert excinfo.value.details == {'operation': 'create_word_set'}
    assert WordSet.query.count() == 0


def test_transaction_retries_locked_database(app, teacher, monkeypatch):
    monkeypatch.setattr(db_session.time, 'sleep', lambda _delay: None)
    store = DataStore()
    attempts = []

    def _work():
        attempts.append(1)
        word_set = store.insert_word_set(teacher.id, 'Retried')
        if len(attempts) == 1:
            raise OperationalError('INSERT', {}, Exception('database is locked'))
        return word_set.id

    word_set_id = store.transaction('create_word_set', _work)

    assert len(attempts) == 2
    assert WordSet.query.count() == 1
    assert store.get_word_set(word_set_id).title == 'Retried'


def test_transaction_does_not_rerun_other_failures(app, teacher, monkeypatch):
    monkeypatch.setattr(db_session.time, 'sleep', lambda _delay: None)
    store = DataStore()
    attempts = []

    def _work():
        attempts.append(1)
        store.insert_word_set(teacher.id, 'Broken')
        raise OperationalError('INSERT', {}, Exception('disk I/O error'))

    with pytest.raises(StoreError):
        store.transaction('create_word_set', _work)

    assert len(attempts) == 1
    assert WordSet.query.count() == 0


def test_read_failure_becomes_store_error(app, monkeypatch):
    store = DataStore()

    def _broken_query(*_args, **_kwargs):
        raise SQLAlchemyError('connection lost')

    monkeypatch.setattr(store.session, 'get', _broken_query)

    with pytest.raises(StoreError):
        store.get_teacher(1)


def test_deleting_teacher_cascades_to_word_sets(app, make_word_set, teacher):
    make_word_set(teacher, words=['a'])
    store = DataStore()

    store.transaction('delete_teacher', lambda: Teacher.query.filter_by(id=teacher.id).delete())

    assert WordSet.query.count() == 0
    assert Word.query.count() == 0
