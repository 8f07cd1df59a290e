"""Message mappings for API responses and roster operation results."""

class Messages:
    """Centralized messages for API responses."""
    
    # Authentication messages
    AUTH = {
        "authentication_required": "Authentication required. Please login.",
        "invalid_credentials": "Could not validate credentials",
        "access_denied": "Access denied. Required roles: {roles}. Your role: {role}",
    }
    
    # General CRUD messages
    CRUD = {
        "operation_failed": "Operation failed",
        "repository_unavailable": "Member repository is unavailable",
        "malformed_response": "Malformed response from member repository",
    }
    
    # Team member messages
    TEAM = {
        "fetched": "Retrieved {count} team members",
        "not_found": "Team member not found",
        "created": "Team member created successfully",
        "updated": "Team member updated successfully",
        "deleted": "Team member deleted successfully",
        "activated": "Team member is now visible",
        "deactivated": "Team member is now hidden",
        "reordered": "Team member order updated successfully",
        "reorder_mismatch": "Member order must list every team member exactly once",
        "load_failed": "Failed to load team members",
    }
    
    # CV messages
    CV = {
        "uploaded": "CV uploaded successfully",
        "deleted": "CV deleted successfully",
        "not_found": "No CV on file for this team member",
        "not_available": "CV not available",
        "no_file": "No CV file provided",
        "empty_file": "The CV file is empty",
        "invalid_type": "Only PDF files are allowed for CVs",
        "too_large": "CV file exceeds the maximum size of {max_mb}MB",
        "storage_failed": "Failed to store CV file: {error}",
    }
    
    # Validation messages
    VALIDATION = {
        "required_field": "Field {field} is required",
        "invalid_data": "Invalid data: {detail}",
        "invalid_placeholder": "Placeholder must be 1-4 uppercase letters",
    }


def get_message(category: str, key: str, **kwargs) -> str:
    """Get a message from the specified category and format it with kwargs."""
    category_messages = getattr(Messages, category.upper(), {})
    message = category_messages.get(key, f"Message not found: {category}.{key}")
    return message.format(**kwargs) if kwargs else message
