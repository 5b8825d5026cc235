import re

EMAIL_RE = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')

MIN_PASSWORD_LENGTH = 8
POST_REACTION_TYPES = ('like', 'love', 'laugh', 'sad')
GALLERY_REACTION_TYPES = ('like', 'love', 'dislike')
FEEDBACK_TYPES = ('public', 'private', 'anonymous')
PROFILE_FIELDS = ('bio', 'favoriteTeacher', 'hobby', 'classOf', 'clan')


def _blank(value):
    return value is None or not str(value).strip()


def _check_class_of(value, errors):
    if _blank(value):
        errors['classOf'] = 'Class of is required.'
    elif len(str(value).strip()) != 4 or not str(value).strip().isdigit():
        errors['classOf'] = 'Class of must be a 4 digit year.'


def _check_clan(value, errors):
    if _blank(value):
        errors['clan'] = 'Clan is required.'
    elif len(str(value).strip()) > 20:
        errors['clan'] = 'Clan must be at most 20 characters.'


def _check_password(value, errors, field='password'):
    if _blank(value):
        errors[field] = 'Password is required.'
    elif len(str(value)) < MIN_PASSWORD_LENGTH:
        errors[field] = f'Password must be at least {MIN_PASSWORD_LENGTH} characters.'


def _check_code(value, errors, length):
    if _blank(value) or len(str(value).strip()) != length:
        errors['code'] = f'Code must be {length} characters.'


def _check_email(value, errors):
    if _blank(value):
        errors['email'] = 'Email is required.'
    elif not EMAIL_RE.match(str(value).strip()):
        errors['email'] = 'Valid email is required.'


def validate_register(data):
    errors = {}
    for field, label in (('name', 'Name'), ('username', 'Username')):
        if _blank(data.get(field)):
            errors[field] = f'{label} is required.'
    _check_email(data.get('email'), errors)
    _check_password(data.get('password'), errors)
    _check_class_of(data.get('classOf'), errors)
    _check_clan(data.get('clan'), errors)
    return (len(errors) == 0, errors)


def validate_login(data):
    errors = {}
    if _blank(data.get('identifier')):
        errors['identifier'] = 'Email or username is required.'
    if _blank(data.get('password')):
        errors['password'] = 'Password is required.'
    return (len(errors) == 0, errors)


def validate_verification(data, code_length=6):
    errors = {}
    _check_code(data.get('code'), errors, code_length)
    if _blank(data.get('email')):
        errors['email'] = 'Email is required.'
    return (len(errors) == 0, errors)


def validate_email_only(data):
    errors = {}
    _check_email(data.get('email'), errors)
    return (len(errors) == 0, errors)


def validate_reset_password(data, code_length=6):
    errors = {}
    _check_code(data.get('code'), errors, code_length)
    _check_password(data.get('newPassword'), errors, field='newPassword')
    if _blank(data.get('email')):
        errors['email'] = 'Email is required.'
    return (len(errors) == 0, errors)


def validate_profile_update(updates):
    errors = {}
    if 'classOf' in updates:
        _check_class_of(updates['classOf'], errors)
    if 'clan' in updates:
        _check_clan(updates['clan'], errors)
    return (len(errors) == 0, errors)


def validate_comment(data):
    errors = {}
    content = data.get('content')
    if _blank(content):
        errors['content'] = 'Comment content is required.'
    elif not isinstance(content, str):
        errors['content'] = 'Comment content must be text.'
    elif len(str(content)) > 500:
        errors['content'] = 'Comment must be at most 500 characters.'
    return (len(errors) == 0, errors)


def validate_reaction(data, allowed):
    errors = {}
    if data.get('type') not in allowed:
        errors['type'] = f"Reaction type must be one of: {', '.join(allowed)}."
    return (len(errors) == 0, errors)


def validate_feedback(data):
    errors = {}
    content = data.get('content')
    if _blank(content):
        errors['content'] = 'Feedback content is required.'
    elif not isinstance(content, str):
        errors['content'] = 'Feedback content must be text.'
    elif len(str(content)) > 1000:
        errors['content'] = 'Feedback must be at most 1000 characters.'
    rating = data.get('rating')
    try:
        rating = int(rating)
        if isinstance(data.get('rating'), bool) or not 1 <= rating <= 10:
            errors['rating'] = 'Rating must be between 1 and 10.'
    except (TypeError, ValueError):
        errors['rating'] = 'Rating must be a number between 1 and 10.'
    if data.get('type') not in FEEDBACK_TYPES:
        errors['type'] = f"Type must be one of: {', '.join(FEEDBACK_TYPES)}."
    return (len(errors) == 0, errors)
