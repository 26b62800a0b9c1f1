import pytest

from cursalia.errors import DuplicateEmail, DuplicateError, NotFoundError, ValidationError
from cursalia.services.account_service import AccountService
from cursalia.services.profile_service import ProfileService


def test_update_profile(ctx):
    ProfileService.update_profile(ctx['student_id'], 'Luis', 'García', 'luis.garcia@correo.com', 'Me gusta programar')

    profile = AccountService.get_profile(ctx['student_id'])
    assert profile['last_name'] == 'García'
    assert profile['email'] == 'luis.garcia@correo.com'
    assert profile['biography'] == 'Me gusta programar'


def test_update_profile_rejects_email_of_another_user(ctx):
    with pytest.raises(DuplicateEmail):
        ProfileService.update_profile(ctx['student_id'], 'Luis', 'Prueba', 'marta@correo.com')

    assert AccountService.get_profile(ctx['student_id'])['email'] == 'alumno@correo.com'


def test_update_profile_keeps_own_email(ctx):
    user = ProfileService.update_profile(ctx['student_id'], 'Luis Miguel', 'Prueba', 'alumno@correo.com')

    assert user.first_name == 'Luis Miguel'


def test_links_lifecycle(ctx):
    link = ProfileService.add_link(ctx['student_id'], 'GitHub', 'https://github.com/luis')
    assert [item.link_name for item in ProfileService.list_links(ctx['student_id'])] == ['GitHub']

    with pytest.raises(DuplicateError):
        ProfileService.add_link(ctx['student_id'], 'GitHub', 'https://github.com/luis')

    ProfileService.edit_link(ctx['student_id'], link.id, 'GitLab', 'https://gitlab.com/luis')
    assert ProfileService.list_links(ctx['student_id'])[0].link_url == 'https://gitlab.com/luis'

    ProfileService.delete_link(ctx['student_id'], link.id)
    assert ProfileService.list_links(ctx['student_id']) == []


def test_links_of_other_users_cannot_be_touched(ctx):
    link = ProfileService.add_link(ctx['other_id'], 'Blog', 'https://marta.dev')

    with pytest.raises(NotFoundError):
        ProfileService.edit_link(ctx['student_id'], link.id, 'Mío', 'https://luis.dev')
    with pytest.raises(NotFoundError):
        ProfileService.delete_link(ctx['student_id'], link.id)

    assert len(ProfileService.list_links(ctx['other_id'])) == 1


@pytest.mark.parametrize('name,url', [
    ('', 'https://github.com/luis'),
    ('GitHub', ''),
    ('GitHub', 'javascript:alert(1)'),
    ('GitHub', 'github.com/luis'),
])
def test_invalid_links_are_rejected(ctx, name, url):
    with pytest.raises(ValidationError):
        ProfileService.add_link(ctx['student_id'], name, url)
