"""
Business operations behind the HTTP views.

Every function takes the acting user (where one exists) and plain values,
and raises the errors from api.exceptions. Nothing here touches the request.
"""
