import datetime

import pytest

from formdef.core import FormState
from formdef.datadef import FileResource
from formdef.error import BadRequestError, RenderingError


def submit(form, state, current_page, **values):
    return form.bind({'__state': state, '__currentPage': current_page, **values})


def state_at(page_index, **form_values):
    return FormState(last_displayed_page_index=page_index, form_values=form_values).serialize_state()


def error_codes(runtime, identifier):
    return [error.code for error in runtime.get_errors_for(identifier)]


class TestNavigation:
    def test_first_request_shows_first_page(self, contact_form):
        runtime = contact_form.bind({})
        assert not runtime.form_state.is_form_submitted
        assert runtime.get_current_page().identifier == 'page1'
        assert runtime.get_previous_page() is None
        assert runtime.get_next_page().identifier == 'page2'

        html = runtime.render()
        assert 'Who are you?' in html
        assert 'name="name"' in html
        assert runtime.form_state.last_displayed_page_index == 0

    def test_invalid_values_redisplay_the_page(self, contact_form):
        runtime = submit(contact_form, state_at(0), 1, name='', email='bad')

        assert runtime.get_current_page().identifier == 'page1'
        assert error_codes(runtime, 'name') == [1001]
        assert error_codes(runtime, 'email') == [1601]
        assert runtime.get_element_value('email') == 'bad'

        html = runtime.render()
        assert 'has-error' in html
        assert 'value="bad"' in html
        assert 'Please specify a valid email address.' in html

    def test_valid_values_advance_to_next_page(self, contact_form):
        runtime = submit(contact_form, state_at(0), 1, name='Alice', email='alice@example.com')

        assert runtime.get_current_page().identifier == 'page2'
        assert not runtime.validation_result.has_errors()
        assert runtime.form_state.get_form_value('name') == 'Alice'

        html = runtime.render()
        assert 'Anything else?' in html
        assert 'Previous' in html
        assert 'Submit' in html
        assert 'Nothing' in html
        assert runtime.form_state.last_displayed_page_index == 1

    def test_going_back_skips_validation(self, contact_form):
        runtime = submit(contact_form, state_at(1, name='Alice'), 0, age='not a number')

        assert runtime.user_went_back_to_previous_step()
        assert runtime.get_current_page().identifier == 'page1'
        assert not runtime.validation_result.has_errors()
        assert runtime.get_element_value('name') == 'Alice'

    def test_skipping_pages_is_not_allowed(self, contact_form):
        runtime = submit(contact_form, state_at(0), 2, name='Alice', email='alice@example.com')
        assert runtime.get_current_page().identifier == 'page1'

    def test_missing_current_page_stays_on_last_page(self, contact_form):
        runtime = contact_form.bind({'__state': state_at(0), 'name': 'Alice', 'email': 'alice@example.com'})
        assert runtime.get_current_page().identifier == 'page1'

    def test_invalid_state_is_rejected(self, contact_form):
        with pytest.raises(BadRequestError):
            contact_form.bind({'__state': '{"last_displayed_page_index": "abc"}'})

    @pytest.mark.parametrize("page_index", [2, 7, -5])
    def test_state_with_unknown_page_is_rejected(self, contact_form, page_index):
        with pytest.raises(BadRequestError):
            submit(contact_form, state_at(page_index), 1)

    def test_state_survives_a_roundtrip_through_the_rendered_form(self, contact_form):
        first = contact_form.bind({})
        first.render()

        second = submit(contact_form, first.serialized_form_state, 1, name='Alice', email='alice@example.com')
        assert second.get_current_page().identifier == 'page2'


class TestFinishing:
    def test_last_page_runs_finishers(self, contact_form):
        runtime = submit(contact_form, state_at(1, name='Alice', email='alice@example.com'), 2, age='42', comments='Hi')

        assert runtime.is_after_last_page()
        assert runtime.render() == 'Thanks Alice'
        assert runtime.form_state.form_values == {
            'name': 'Alice', 'email': 'alice@example.com', 'age': '42', 'comments': 'Hi'
        }

    def test_errors_on_last_page_prevent_finishing(self, contact_form):
        runtime = submit(contact_form, state_at(1, name='Alice'), 2, age='old')

        assert runtime.get_current_page().identifier == 'page2'
        assert error_codes(runtime, 'age') == [1201]
        assert 'Thanks' not in runtime.render()

    def test_redirect_cancels_remaining_finishers(self, form_factory):
        form = form_factory.build({
            'identifier': 'redirecting',
            'renderables': [{'identifier': 'page1'}],
            'finishers': [
                {'identifier': 'Formdef:Redirect', 'options': {'uri': 'https://example.com/thanks'}},
                {'identifier': 'Formdef:Confirmation'},
            ],
        })
        runtime = submit(form, state_at(0), 1)

        assert runtime.render() is None
        assert runtime.response.is_redirect
        assert runtime.response.redirect_uri == 'https://example.com/thanks'
        assert runtime.response.status_code == 303

    def test_closure_finisher_receives_form_values(self, form_factory):
        received = []
        form = form_factory.build({
            'identifier': 'closure',
            'renderables': [{
                'identifier': 'page1',
                'renderables': [{'identifier': 'topic', 'type': 'Formdef:SingleLineText'}],
            }],
            'finishers': [{
                'identifier': 'Formdef:Closure',
                'options': {'closure': lambda context: received.append(dict(context.form_values))},
            }],
        })
        submit(form, state_at(0), 1, topic='Billing').render()

        assert received == [{'topic': 'Billing'}]

    def test_confirmation_escapes_form_values(self, contact_form):
        runtime = submit(
            contact_form, state_at(1, name='<script>alert(1)</script>', email='alice@example.com'), 2, age='42'
        )
        assert runtime.render() == 'Thanks &lt;script&gt;alert(1)&lt;/script&gt;'

    def test_confirmation_placeholders(self, form_factory):
        form = form_factory.build({
            'identifier': 'address',
            'renderables': [{
                'identifier': 'page1',
                'renderables': [{'identifier': 'address.city', 'type': 'Formdef:SingleLineText'}],
            }],
            'finishers': [{
                'identifier': 'Formdef:Confirmation',
                'options': {'message': '<p style="x{}">City {address.city}{missing} {0}</p>'},
            }],
        })
        runtime = submit(form, state_at(0), 1, address={'city': 'Hanoi & Co'})

        assert runtime.render() == '<p style="x{}">City Hanoi &amp; Co {0}</p>'

    def test_typed_values_survive_the_state_roundtrip(self, form_factory):
        received = []
        form = form_factory.build({
            'identifier': 'application',
            'renderables': [
                {
                    'identifier': 'page1',
                    'renderables': [
                        {'identifier': 'cv', 'type': 'Formdef:FileUpload'},
                        {'identifier': 'birthday', 'type': 'Formdef:DatePicker'},
                    ],
                },
                {
                    'identifier': 'page2',
                    'renderables': [{'identifier': 'motivation', 'type': 'Formdef:SingleLineText'}],
                },
            ],
            'finishers': [{
                'identifier': 'Formdef:Closure',
                'options': {'closure': lambda context: received.append(dict(context.form_values))},
            }],
        })

        first = submit(form, state_at(0), 1, cv=FileResource(filename='cv.pdf'), birthday='2000-02-01')
        assert 'page2' in first.render()

        second = submit(form, first.serialized_form_state, 2, motivation='Curiosity')
        assert isinstance(second.get_element_value('cv'), FileResource)
        second.render()

        values = received[0]
        assert isinstance(values['cv'], FileResource)
        assert values['cv'].filename == 'cv.pdf'
        assert values['birthday'] == datetime.date(2000, 2, 1)
        assert values['motivation'] == 'Curiosity'


class TestRendering:
    def test_custom_template_search_path(self, contact_form, tmp_path):
        (tmp_path / 'SingleLineText.html').write_text('<custom>{{ renderable.identifier }}</custom>')
        contact_form.set_rendering_option('templateSearchPaths', [str(tmp_path)])

        html = contact_form.bind({}).render()
        assert '<custom>name</custom>' in html
        assert '<custom>email</custom>' in html

    def test_missing_template(self, contact_form):
        contact_form.get_element_by_identifier('name').set_rendering_option('templatePathPattern', 'missing/{@type}.html')
        with pytest.raises(RenderingError):
            contact_form.bind({}).render()

    def test_unknown_renderer(self, contact_form):
        contact_form.renderer_class_name = 'formdef.nonexisting.Renderer'
        with pytest.raises(RenderingError):
            contact_form.bind({}).render()

    def test_selection_elements(self, form_factory):
        options = {'red': 'Red', 'blue': 'Blue'}
        form = form_factory.build({
            'identifier': 'colors',
            'renderables': [{
                'identifier': 'page1',
                'renderables': [
                    {'identifier': 'favorite', 'type': 'Formdef:SingleSelectDropdown',
                     'properties': {'options': options}, 'defaultValue': 'blue'},
                    {'identifier': 'second', 'type': 'Formdef:SingleSelectRadiobuttons',
                     'properties': {'options': options}},
                    {'identifier': 'all', 'type': 'Formdef:MultipleSelectCheckboxes',
                     'properties': {'options': options}, 'defaultValue': ['red']},
                    {'identifier': 'agree', 'type': 'Formdef:Checkbox', 'label': 'I agree'},
                ],
            }],
        })
        html = form.bind({}).render()

        assert '<option value="blue" selected>Blue</option>' in html
        assert 'type="radio" name="second" value="red">' in html
        assert 'name="all[]" value="red" checked' in html
        assert 'type="checkbox" id="colors-agree" name="agree" value="1">' in html

    def test_values_are_escaped(self, contact_form):
        runtime = submit(contact_form, state_at(0), 1, name='<script>', email='x')
        html = runtime.render()
        assert '<script>' not in html
        assert '&lt;script&gt;' in html


@pytest.fixture
def upload_form(form_factory):
    return form_factory.build({
        'identifier': 'upload',
        'renderables': [{
            'identifier': 'page1',
            'renderables': [
                {'identifier': 'cv', 'type': 'Formdef:FileUpload'},
                {'identifier': 'photo', 'type': 'Formdef:ImageUpload'},
                {'identifier': 'notes', 'type': 'Formdef:FileUpload', 'properties': {'allowedExtensions': ['txt']}},
                {'identifier': 'birthday', 'type': 'Formdef:DatePicker', 'properties': {'dateFormat': '%d.%m.%Y'}},
                {'identifier': 'password', 'type': 'Formdef:PasswordWithConfirmation'},
                {'identifier': 'intro', 'type': 'Formdef:StaticText', 'properties': {'text': 'Hello'}},
            ],
        }],
    })


class TestCustomElements:
    def test_valid_submission(self, upload_form):
        runtime = submit(
            upload_form, state_at(0), 1,
            cv=FileResource(filename='cv.pdf', media_type='application/pdf'),
            photo={'filename': 'me.png', 'media_type': 'image/png'},
            notes=FileResource(filename='notes.txt'),
            birthday='01.02.2000',
            password={'password': 'secret', 'confirmation': 'secret'},
        )

        assert not runtime.validation_result.has_errors()
        assert runtime.is_after_last_page()

        values = runtime.form_state.form_values
        assert values['cv'].filename == 'cv.pdf'
        assert isinstance(values['photo'], FileResource)
        assert values['birthday'] == datetime.date(2000, 2, 1)
        assert values['password'] == 'secret'
        assert 'intro' not in values

    def test_invalid_submission(self, upload_form):
        runtime = submit(
            upload_form, state_at(0), 1,
            cv=FileResource(filename='cv.exe'),
            photo={'filename': 'me.png', 'media_type': 'text/plain'},
            notes=FileResource(filename='notes.pdf'),
            birthday='2000-02-01',
            password={'password': 'secret', 'confirmation': 'other'},
        )

        assert runtime.get_current_page().identifier == 'page1'
        assert error_codes(runtime, 'cv') == [2102]
        assert error_codes(runtime, 'photo') == [2202]
        assert error_codes(runtime, 'notes') == [2102]
        assert error_codes(runtime, 'birthday') == [4001]
        assert error_codes(runtime, 'password') == [4101]

    def test_upload_form_renders(self, upload_form):
        html = upload_form.bind({}).render()
        assert 'type="file"' in html
        assert 'accept=".pdf,.doc"' in html
        assert 'name="password[confirmation]"' in html
        assert 'Hello' in html
