from django.apps import AppConfig
from django.conf import settings
from django.utils.module_loading import import_string


class StringAnalyserConfig(AppConfig):
    name = 'String_Analyser'
    verbose_name = 'String Analyser'

    store = None

    def ready(self):
        backend = getattr(
            settings, 'STRING_STORE_BACKEND', 'String_Analyser.store.InMemoryStringStore')
        self.store = import_string(backend)()
