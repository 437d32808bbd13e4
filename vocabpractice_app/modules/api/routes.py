# File: vocabpractice_app/modules/api/routes.py
# Read-only JSON lists backing the student wizard's teacher and word set
# pickers. Store failures surface through the JSON error handler.

from vocabpractice_app.core.error_handlers import NotFoundError, success_response
from vocabpractice_app.services.data_store import DataStore

from . import api_bp


@api_bp.route('/teachers')
def list_teachers():
    teachers = DataStore().list_teachers()
    return success_response(data=[{'id': t.id, 'full_name': t.full_name} for t in teachers])


@api_bp.route('/teachers/<int:teacher_id>/word-sets')
def list_teacher_word_sets(teacher_id):
    store = DataStore()
    if store.get_teacher(teacher_id) is None:
        raise NotFoundError('Teacher not found', resource='teacher')

    word_sets = store.list_word_sets(teacher_id)
    return success_response(data=[
        {
            'id': ws.id,
            'title': ws.title,
            'created_at': ws.created_at.isoformat() if ws.created_at else None,
        }
        for ws in word_sets
    ])
