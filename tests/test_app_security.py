"""Tests for app.py security features: headers and error handler."""


def test_security_headers_present(client):
    """All security headers should be set on every response."""
    resp = client.get('/')
    assert resp.headers.get('X-Content-Type-Options') == 'nosniff'
    assert resp.headers.get('X-Frame-Options') == 'SAMEORIGIN'
    assert 'Content-Security-Policy' in resp.headers


def test_csp_allows_data_images(client):
    csp = client.get('/').headers.get('Content-Security-Policy')
    assert "img-src 'self' data:" in csp


def test_headers_on_error_responses(client):
    resp = client.post('/api/roadmap', json={})
    assert resp.status_code == 400
    assert resp.headers.get('X-Content-Type-Options') == 'nosniff'


def test_error_handler_hides_details(app):
    """Error handler should NOT leak exception details to user."""
    @app.route('/test-500')
    def crash():
        raise ValueError('secret database password is xyz123')

    with app.test_client() as c:
        resp = c.get('/test-500')
        assert resp.status_code == 500
        body = resp.data.decode()
        assert 'secret database password' not in body
        assert 'xyz123' not in body
        assert 'Internal Server Error' in body


def test_unknown_route_json_404(client):
    resp = client.get('/no-such-page')
    assert resp.status_code == 404
    assert 'error' in resp.get_json()


def test_home_lists_endpoint(client):
    data = client.get('/').get_json()
    assert data['endpoints']['roadmap'] == 'POST /api/roadmap'
