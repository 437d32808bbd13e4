def test_list_teachers(client, teacher):
    response = client.get('/api/teachers')

    assert response.status_code == 200
    assert response.get_json() == {
        'success': True,
        'data': [{'id': teacher.id, 'full_name': 'Ms. Rivera'}],
    }


def test_list_teacher_word_sets(client, teacher, make_word_set):
    make_word_set(teacher, title='Older')
    make_word_set(teacher, title='Newer')

    payload = client.get(f'/api/teachers/{teacher.id}/word-sets').get_json()

    assert payload['success'] is True
    assert [ws['title'] for ws in payload['data']] == ['Newer', 'Older']


def test_unknown_teacher_is_json_not_found(client):
    response = client.get('/api/teachers/999/word-sets')

    assert response.status_code == 404
    assert response.get_json()['code'] == 'NOT_FOUND'


def test_unknown_api_endpoint_is_json(client):
    response = client.get('/api/nothing-here')

    assert response.status_code == 404
    assert response.get_json()['success'] is False
