# File: vocabpractice_app/modules/word_sets/forms.py
# Forms for the teacher's word set pages. Word rows are a FieldList so the
# page can add and remove rows without any JavaScript.

from flask_wtf import FlaskForm
from wtforms import FieldList, HiddenField, StringField, SubmitField
from wtforms.validators import Length, Optional


class WordRowsMixin:
    """Row editing shared by the create and edit forms."""

    def add_row(self):
        self.words.append_entry()

    def remove_row(self, index: int) -> bool:
        data = [entry.data for entry in self.words.entries]
        if not 0 <= index < len(data) or len(data) <= 1:
            return False
        del data[index]
        self.set_rows(data)
        return True

    def set_rows(self, words):
        self.words.entries = []
        self.words.last_index = -1
        for word in words:
            self.words.append_entry(word)
        if not self.words.entries:
            self.words.append_entry()

    def pad_rows(self, min_rows: int):
        while len(self.words.entries) < min_rows:
            self.words.append_entry()


class WordSetForm(WordRowsMixin, FlaskForm):
    """Form to create a word set: a title plus one row per word."""
    title = StringField('Title', validators=[Length(max=255)],
                        render_kw={'placeholder': 'e.g., Lesson 1'})
    words = FieldList(StringField('Word', validators=[Optional(), Length(max=255)]), min_entries=1)
    add_word = SubmitField('Add word')
    submit = SubmitField('Create word set')


class WordListForm(WordRowsMixin, FlaskForm):
    """Form to replace the word list of an existing set."""
    words = FieldList(StringField('Word', validators=[Optional(), Length(max=255)]), min_entries=1)
    add_word = SubmitField('Add word')
    submit = SubmitField('Save words')


class ConfirmForm(FlaskForm):
    """Confirmation step for destructive actions; the page posts confirm=yes."""
    confirm = HiddenField()
    submit = SubmitField('Confirm')

    @property
    def confirmed(self) -> bool:
        return self.confirm.data == 'yes'
