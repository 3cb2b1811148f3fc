from animalia.models import Room, Leaderboard


def test_home_and_info(client):
    assert client.get('/').status_code == 200
    assert client.get('/info').status_code == 200


def test_start_page_redirects_outside_public_range(client, seeded):
    for path in ('/0', '/3', '/abc', '/-1'):
        res = client.get(path)
        assert res.status_code == 302, path
        assert res.headers['Location'].endswith('/')


def test_start_page_redirects_for_unknown_room(client):
    res = client.get('/1')
    assert res.status_code == 302


def test_start_page_shows_top_three(client, seeded):
    for name, score in [('Anna', 10), ('Bela', 40), ('Csaba', 30), ('Dora', 20)]:
        assert client.post('/newResult', json={'room_id': 1, 'player_name': name, 'score': score}).status_code == 200
    res = client.get('/1')
    assert res.status_code == 200
    body = res.get_data(as_text=True)
    assert 'Szekreny 1' in body
    assert body.index('Bela') < body.index('Csaba') < body.index('Dora')
    assert 'Anna' not in body


def test_new_result_ranks_and_leaderboard_order(client, seeded):
    res = client.post('/newResult', json={'room_id': 1, 'player_name': 'Xena', 'score': 50})
    assert res.status_code == 200
    assert res.get_json() == {'success': 1}

    res = client.post('/newResult', json={'room_id': 1, 'player_name': 'Yuri', 'score': 80})
    assert res.get_json() == {'success': 1}

    body = client.get('/1/leader').get_data(as_text=True)
    assert body.index('Yuri') < body.index('Xena')


def test_new_result_accepts_legacy_form_fields(client, seeded, fetch):
    res = client.post('/newResult', data={'szekreny': '2', 'nev': 'Zoli', 'pont': '7'})
    assert res.status_code == 200
    assert res.get_json()['success'] == 1
    entries = fetch(Leaderboard, 2)['entries']
    assert entries[0]['player_name'] == 'Zoli'
    assert entries[0]['score'] == 7


def test_new_result_keeps_one_entry_per_player(client, seeded, fetch):
    client.post('/newResult', json={'room_id': 1, 'player_name': 'Xena', 'score': 50})
    client.post('/newResult', json={'room_id': 1, 'player_name': 'Yuri', 'score': 80})
    res = client.post('/newResult', json={'room_id': 1, 'player_name': 'Xena', 'score': 30})
    assert res.get_json() == {'success': 2}
    res = client.post('/newResult', json={'room_id': 1, 'player_name': 'Xena', 'score': 90})
    assert res.get_json() == {'success': 1}
    entries = fetch(Leaderboard, 1)['entries']
    assert sorted((e['player_name'], e['score']) for e in entries) == [('Xena', 90), ('Yuri', 80)]


def test_new_result_errors(client, seeded):
    res = client.post('/newResult', json={'room_id': 99, 'player_name': 'X', 'score': 1})
    assert res.status_code == 404
    assert res.get_json()['success'] is False

    res = client.post('/newResult', json={'room_id': 1, 'player_name': '', 'score': 1})
    assert res.status_code == 400

    res = client.post('/newResult', json={'room_id': 1, 'player_name': 'X', 'score': 'lots'})
    assert res.status_code == 400


def test_leader_page_range(client, seeded):
    assert client.get('/4/leader').status_code == 200
    assert client.get('/5/leader').status_code == 302
    assert client.get('/x/leader').status_code == 302


def test_play_page_lists_full_codes_and_labels(client, seeded):
    res = client.get('/3/play')
    assert res.status_code == 200
    body = res.get_data(as_text=True)
    assert 'const codes = [1, 2, 3];' in body
    assert 'const labels = ["A", "B", "C"];' in body
    assert body.count('<img src="/img/') == 3


def test_play_page_redirects(client, seeded):
    assert client.get('/5/play').status_code == 302
    assert client.get('/nope/play').status_code == 302


def test_push_appends_item(client, seeded, fetch):
    res = client.post('/push', data={'szekreny': '1', 'nev': 'Roka', 'szam': '12', 'url': '/img/roka.png'})
    assert res.status_code == 200
    assert res.get_json() == {'success': 'Roka'}
    res = client.post('/push', json={'room_id': 1, 'label': 'Medve', 'code': 13})
    assert res.get_json() == {'success': 'Medve'}

    items = fetch(Room, 1)['items']
    assert items == [
        {'label': 'Roka', 'code': 12, 'image_ref': '/img/roka.png'},
        {'label': 'Medve', 'code': 13, 'image_ref': ''},
    ]


def test_push_errors(client, seeded):
    assert client.post('/push', json={'room_id': 42, 'label': 'X', 'code': 1}).status_code == 404
    assert client.post('/push', json={'room_id': 1, 'label': 'X', 'code': 'one'}).status_code == 400


def test_push_form_requires_login(client, admin_client):
    assert client.get('/pushAdmin').status_code == 302
    assert admin_client.get('/pushAdmin').status_code == 200


def test_new_result_after_last_school_year_puts_player_back_on_board(client, seeded, fetch, admin_client):
    res = admin_client.put('/admin/szekreny/1/save', json={
        'entries': [{'player_name': 'Xena', 'score': 90, 'recorded_at': '2001-10-01T08:00:00+00:00'}],
    })
    assert res.status_code == 200

    res = client.post('/newResult', json={'room_id': 1, 'player_name': 'Xena', 'score': 40})
    assert res.get_json() == {'success': 1}
    entries = fetch(Leaderboard, 1)['entries']
    assert [(e['player_name'], e['score']) for e in entries] == [('Xena', 40)]
    assert 'Xena' in client.get('/1/leader').get_data(as_text=True)
