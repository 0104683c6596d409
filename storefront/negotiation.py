from rest_framework.negotiation import DefaultContentNegotiation
from rest_framework.renderers import TemplateHTMLRenderer
from rest_framework.response import Response

HTMX_HEADER = "HX-Request"


def is_htmx(request):
    return request.headers.get(HTMX_HEADER) == "true"


def renders_fragment(request):
    renderer = getattr(request, "accepted_renderer", None)
    return renderer is not None and renderer.format == "html"


def negotiated_response(
    request, data, template_name, context=None, status=200, headers=None
):
    """Respond with ``data`` as JSON, or render ``template_name`` with ``context`` for htmx."""
    if renders_fragment(request):
        return Response(
            data if context is None else context,
            status=status,
            template_name=template_name,
            headers=headers,
        )
    return Response(data, status=status, headers=headers)


class HtmxContentNegotiation(DefaultContentNegotiation):
    """Pick the HTML fragment renderer for htmx requests and JSON for everything else."""

    def select_renderer(self, request, renderers, format_suffix=None):
        wants_fragment = is_htmx(request)
        for renderer in renderers:
            if isinstance(renderer, TemplateHTMLRenderer) == wants_fragment:
                return renderer, renderer.media_type
        return super().select_renderer(request, renderers, format_suffix)
