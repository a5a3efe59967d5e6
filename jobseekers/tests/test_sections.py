"""
Tests for CV section payload validation.
"""

import pytest

from jobseekers.sections import (
    SectionType,
    default_position,
    entry_count,
    flatten_search_text,
    is_known_type,
    validate_payload,
)


class TestValidatePayload:

    def test_unknown_section_type_is_rejected(self):
        content, errors = validate_payload('hobbies', {'items': ['chess']})

        assert content is None
        assert 'section_type' in errors

    def test_content_must_be_an_object(self):
        content, errors = validate_payload('skills', ['Python'])

        assert content is None
        assert 'content' in errors

    def test_experience_dates_are_normalised_to_iso_strings(self):
        content, errors = validate_payload('experience', {
            'entries': [{
                'title': 'Engineer',
                'company': 'Andela',
                'start_date': '2019-01-15',
                'end_date': '2020-06-30',
            }],
        })

        assert errors == {}
        entry = content['entries'][0]
        assert entry['start_date'] == '2019-01-15'
        assert entry['end_date'] == '2020-06-30'
        assert entry['location'] == ''

    def test_experience_end_before_start_is_rejected(self):
        content, errors = validate_payload('experience', {
            'entries': [{
                'title': 'Engineer',
                'company': 'Andela',
                'start_date': '2020-01-01',
                'end_date': '2019-01-01',
            }],
        })

        assert content is None
        assert 'entries' in errors

    def test_education_requires_graduation_year(self):
        content, errors = validate_payload('education', {
            'entries': [{'degree': 'BSc', 'institution': 'UNILAG'}],
        })

        assert content is None
        assert 'entries' in errors

    def test_skills_are_trimmed_and_deduplicated(self):
        content, errors = validate_payload('skills', {'items': [' Python', 'python ', 'Django']})

        assert errors == {}
        assert content == {'items': ['Python', 'Django']}

    def test_language_proficiency_is_a_closed_set(self):
        _content, errors = validate_payload('languages', {
            'entries': [{'name': 'Yoruba', 'proficiency': 'expert'}],
        })

        assert 'entries' in errors

    def test_project_link_must_be_a_url(self):
        _content, errors = validate_payload('projects', {
            'entries': [{'name': 'Ledger', 'link': 'not a url'}],
        })

        assert 'entries' in errors


class TestHelpers:

    def test_known_types(self):
        assert is_known_type('summary')
        assert is_known_type(SectionType.PUBLICATIONS)
        assert not is_known_type('hobbies')

    def test_default_position_follows_canonical_order(self):
        assert default_position('summary') == 0
        assert default_position('experience') == 1
        assert default_position('publications') == len(SectionType.values) - 1

    def test_flatten_search_text_collects_nested_strings(self):
        text = flatten_search_text({
            'entries': [{'title': 'Data Engineer', 'company': 'Flutterwave', 'graduation_year': 2018}],
        })

        assert 'data engineer' in text
        assert 'flutterwave' in text
        assert '2018' not in text

    @pytest.mark.parametrize('section_type,content,expected', [
        ('summary', {'text': '  twelve chars  '}, 12),
        ('skills', {'items': ['a', 'b']}, 2),
        ('education', {'entries': [{}]}, 1),
        ('experience', None, 0),
    ])
    def test_entry_count(self, section_type, content, expected):
        assert entry_count(section_type, content) == expected
