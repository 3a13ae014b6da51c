"""
Centralized user-facing messages.
All API text lives here for consistency.
"""

MESSAGES = {
    # Success messages
    'login_success': 'Welcome {name}',
    'logout_success': 'Signed out',
    'setup_complete': 'Manager account created. You can now sign in.',
    'reservation_created': "Reservation submitted! We'll contact you via {channel} to confirm your booking.",
    'reservation_status_updated': 'Reservation {status}',
    'reservation_status_unchanged': 'Reservation is already {status}',
    'attendance_marked': 'Attendance recorded as {attendance}',
    'reservation_deleted': 'Reservation deleted',
    'notification_resent': 'Notification processed',
    'slot_blocked': 'Time slot blocked successfully',
    'slot_unblocked': 'Time slot unblocked successfully',
    'user_created': 'User created successfully',
    'user_updated': 'User updated successfully',
    'user_deleted': 'User deleted successfully',
    'provider_saved': 'Provider configuration saved',
    'provider_deleted': 'Provider configuration removed',
    'password_updated': 'Password updated',
    'provider_test_sent': 'Test message sent via {provider}',

    # Error messages
    'invalid_credentials': 'Invalid username or password',
    'account_disabled': 'Your account has been disabled. Contact a manager.',
    'login_required': 'Please sign in to continue',
    'permission_denied': 'You do not have permission for this action',
    'setup_already_done': 'Setup has already been completed',
    'data_required': 'Request body is required',
    'required_fields': 'Please fill in all required fields: {fields}',
    'invalid_email': 'Please enter a valid email address',
    'invalid_phone': 'Please enter a valid phone number (10 to 15 digits)',
    'invalid_date': 'Date must be in YYYY-MM-DD format',
    'invalid_time': 'Time must be in HH:MM format',
    'invalid_party_size': 'Party size must be a whole number between 1 and {maximum}',
    'invalid_preference': 'Communication preference must be one of: {choices}',
    'date_in_past': 'Please select a future date',
    'slot_unavailable': 'Sorry, this time slot is not available. Please choose a different time.',
    'reservation_not_found': 'Reservation not found',
    'invalid_status': 'Status must be one of: {choices}',
    'invalid_transition': 'Cannot change a {current} reservation to {requested}. Allowed: {allowed}',
    'invalid_attendance': 'Attendance must be one of: {choices}',
    'attendance_requires_confirmed': 'Attendance can only be marked on confirmed reservations',
    'attendance_already_marked': 'Attendance has already been recorded for this reservation',
    'attendance_is_final': 'Reservations with recorded attendance cannot be changed',
    'concurrent_update': 'Reservation was changed by someone else. Reload and try again.',
    'slot_already_blocked': 'This time slot is already blocked',
    'slot_in_past': 'Cannot block past time slots',
    'slot_not_found': 'Blocked slot not found',
    'username_exists': 'Username already exists',
    'user_not_found': 'User not found',
    'unknown_role': 'Role must be one of: {choices}',
    'unknown_permissions': 'Unknown permissions: {codes}',
    'cannot_delete_self': 'You cannot delete your own account',
    'cannot_remove_last_manager': 'At least one active manager must remain',
    'unknown_provider': 'Unknown provider: {provider}',
    'provider_missing_fields': '{provider} configuration is missing: {fields}',
    'provider_invalid_settings': '{provider} configuration is invalid: {problems}',
    'provider_not_configured': '{provider} is not configured',
    'provider_test_failed': 'Test message was not delivered: {error}',
    'test_recipient_required': 'A recipient is required to send a test message',
    'body_must_be_object': 'Request body must be a JSON object',
    'internal_error': 'Internal server error',
    'not_found': 'Resource not found',
    'method_not_allowed': 'Method not allowed',

    # Warnings
    'large_party': 'For parties of {threshold} or more, please call us at {phone} for special arrangements',
    'notification_not_sent': 'Customer notification was not delivered ({outcome}). Check the delivery log.',
}
