"""scrum — post and read daily scrum updates kept in object storage."""
