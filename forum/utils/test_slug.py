# forum/utils/test_slug.py
import pytest

from forum.utils.slug import derive_slug


@pytest.mark.parametrize('title, slug', [
    ('JavaScript', 'javascript'),
    ('Backend Development', 'backend-development'),
    ('HTML-CSS', 'html-css'),
    ('  What is a closure?  ', 'what-is-a-closure'),
    ('Café au lait', 'cafe-au-lait'),
    ('', ''),
    (None, ''),
])
def test_derive_slug(title, slug):
    assert derive_slug(title) == slug


def test_derive_slug_is_deterministic():
    assert derive_slug('Event Loop') == derive_slug('Event Loop')
