import pytest

from formdef.core.model import FormDefinition, Page
from formdef.factory import ArrayFormFactory
from formdef.form_elements import GenericFormElement
from formdef.validation import NotEmptyValidator, StringLengthValidator


DUMMY_FORM_DEFAULTS = {
    'validatorPresets': {
        'MyValidatorIdentifier': {
            'implementationClassName': StringLengthValidator,
        },
        'MyOtherValidatorIdentifier': {
            'implementationClassName': NotEmptyValidator,
        },
    },
    'formElementTypes': {
        'Formdef:Form': {},
        'Formdef:Page': {
            'implementationClassName': Page,
        },
        'Formdef:MyElementType': {
            'implementationClassName': GenericFormElement,
        },
        'Formdef:MyElementTypeWithAdditionalProperties': {
            'implementationClassName': GenericFormElement,
            'label': 'my label',
            'defaultValue': 'This is the default value',
            'properties': {
                'property1': 'val1',
                'property2': 'val2',
            },
            'renderingOptions': {
                'ro1': 'rv1',
                'ro2': 'rv2',
            },
            'rendererClassName': 'MyRendererClassName',
        },
        'Formdef:MyElementTypeWithoutImplementationClassName': {},
        'Formdef:MyElementTypeWithUnknownProperties': {
            'implementationClassName': GenericFormElement,
            'unknownProperty': 'foo',
        },
        'Formdef:MyElementTypeWhichDoesNotImplementFormElementInterface': {
            'implementationClassName': 'formdef.factory.ArrayFormFactory',
        },
        'Formdef:MyElementWithValidator': {
            'implementationClassName': GenericFormElement,
            'validators': [
                {
                    'identifier': 'MyValidatorIdentifier',
                    'options': {'minimum': 10},
                },
                {
                    'identifier': 'MyOtherValidatorIdentifier',
                },
            ],
        },
        'Formdef:MyElementWithBrokenValidator': {
            'implementationClassName': GenericFormElement,
            'validators': [
                {'identifier': 'nonExisting'},
            ],
        },
    },
}


@pytest.fixture
def dummy_form_definition():
    return FormDefinition('myForm', DUMMY_FORM_DEFAULTS)


@pytest.fixture(scope="session")
def form_factory():
    return ArrayFormFactory()


@pytest.fixture
def contact_form(form_factory):
    """ Two pages and a confirmation, built from the bundled default preset """
    return form_factory.build({
        'identifier': 'contact',
        'label': 'Contact us',
        'renderables': [
            {
                'identifier': 'page1',
                'label': 'Who are you?',
                'renderables': [
                    {
                        'identifier': 'name',
                        'type': 'Formdef:SingleLineText',
                        'label': 'Name',
                        'validators': [
                            {'identifier': 'Formdef:NotEmpty'},
                            {'identifier': 'Formdef:StringLength', 'options': {'minimum': 3}},
                        ],
                    },
                    {
                        'identifier': 'email',
                        'type': 'Formdef:SingleLineText',
                        'label': 'Email',
                        'validators': [{'identifier': 'Formdef:EmailAddress'}],
                    },
                ],
            },
            {
                'identifier': 'page2',
                'label': 'Anything else?',
                'renderables': [
                    {
                        'identifier': 'age',
                        'type': 'Formdef:SingleLineText',
                        'label': 'Age',
                        'validators': [{'identifier': 'Formdef:Integer'}],
                    },
                    {
                        'identifier': 'comments',
                        'type': 'Formdef:MultiLineText',
                        'label': 'Comments',
                        'defaultValue': 'Nothing',
                    },
                ],
            },
        ],
        'finishers': [
            {'identifier': 'Formdef:Confirmation', 'options': {'message': 'Thanks {name}'}},
        ],
    })
