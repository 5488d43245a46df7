from datahive.api.collection import FacadeCollectionMixin
from datahive.api.template import FacadeTemplateMixin
from datahive.api.view import FacadeViewMixin


class Facade(FacadeCollectionMixin, FacadeTemplateMixin, FacadeViewMixin):
    """A shim to integrate the security layer with a service frontend.

    Every method runs in a transaction thread and returns a C{Deferred} that
    fires with plain values that can be serialized as JSON.

    @param transact: The L{Transact} instance to use when running functions
        in a transaction thread.
    """

    def __init__(self, transact):
        self._transact = transact
