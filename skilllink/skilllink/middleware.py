"""
Custom middleware to handle frame options for media files
"""
from django.conf import settings


class MediaFrameOptionsMiddleware:
    """
    Exempt media responses (lesson attachments, certificate PDFs) from the
    X-Frame-Options header so they can be displayed in iframes.
    Must sit below XFrameOptionsMiddleware in MIDDLEWARE.
    """
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        response = self.get_response(request)

        if settings.MEDIA_URL and request.path.startswith(settings.MEDIA_URL):
            response.xframe_options_exempt = True
            if 'X-Frame-Options' in response:
                del response['X-Frame-Options']

        return response
