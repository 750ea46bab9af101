from email_validator import validate_email as email_validator, EmailNotValidError

def validate_email(email):
    """Validate email address"""
    try:
        email_validator(email, check_deliverability=False)
        return True
    except EmailNotValidError:
        return False

def validate_password(password):
    """Validate password strength"""
    if not password:
        return False

    # Minimum 8 characters
    if len(password) < 8:
        return False

    return True
