"""Localized user-facing messages and placeholder filling.

Each language is a flat catalog of message keys. Lookups fall back to English
per key, so a partial translation never leaves the user without a message.

Templates may contain three placeholders: ``{{packageName}}``,
``{{version}}`` and ``{{url}}``. :func:`fill_placeholders` substitutes the
first occurrence of each and leaves everything else as literal text.
"""

from __future__ import annotations

import re
from typing import Dict, Mapping

EN: Dict[str, str] = {
    # prompts and progress
    "title": "PROJECT UPDATER",
    "selectPackage": "Select the package to install",
    "welcome": "Welcome to the {{packageName}} installer.",
    "noFiles": "No installed files were found in this directory.",
    "downloadPrompt": "Do you want to download {{packageName}} now?",
    "downloading": "Downloading from {{url}}...",
    "downloadSuccess": "{{packageName}} was downloaded successfully.",
    "updated": "{{packageName}} is up to date ({{version}}).",
    "newVersionAvailable": "A new version of {{packageName}} is available: {{version}}",
    "updatePrompt": "Do you want to update now?",
    "creatingBackup": "Creating a backup of the current files...",
    "backupSuccess": "Backup created.",
    "updateSuccess": "{{packageName}} was updated to {{version}}.",
    "resumeSuccess": "The interrupted download of {{packageName}} {{version}} was completed.",
    "changelogHeader": "Changes in {{version}}:",
    "changelogEmpty": "No changelog was published for this release.",
    "kindHeader": "Type",
    "descriptionHeader": "Description",
    "actionAdded": "Added",
    "actionRemoved": "Removed",
    "actionFixed": "Fixed",
    "notes": "Notes",
    # errors and cancellations
    "userCancelled": "Operation cancelled by the user.",
    "resumeDownload": "The last download of {{packageName}} was interrupted.",
    "resumePrompt": "Do you want to resume it?",
    "firstTimeCancel": "Download cancelled. Run the updater again when you are ready.",
    "updateCancel": "Update cancelled.",
    "apiError": "Could not reach the release service.",
    "noPackages": "The release service returned no installable packages.",
    "unknownPackage": "{{packageName}} is not an installable package.",
    "downloadError": "The download failed. Run the updater again to resume it.",
    "backupError": "Could not create the backup; nothing was changed.",
    "configReadError": "The state file could not be read.",
    "unexpectedError": "An unexpected error occurred.",
}

ES: Dict[str, str] = {
    "title": "ACTUALIZADOR DE PROYECTOS",
    "selectPackage": "Selecciona el paquete a instalar",
    "welcome": "Bienvenido al instalador de {{packageName}}.",
    "noFiles": "No se encontraron archivos instalados en este directorio.",
    "downloadPrompt": "¿Quieres descargar {{packageName}} ahora?",
    "downloading": "Descargando desde {{url}}...",
    "downloadSuccess": "{{packageName}} se descargó correctamente.",
    "updated": "{{packageName}} está actualizado ({{version}}).",
    "newVersionAvailable": "Hay una nueva versión de {{packageName}}: {{version}}",
    "updatePrompt": "¿Quieres actualizar ahora?",
    "creatingBackup": "Creando una copia de seguridad de los archivos actuales...",
    "backupSuccess": "Copia de seguridad creada.",
    "updateSuccess": "{{packageName}} se actualizó a {{version}}.",
    "resumeSuccess": "Se completó la descarga interrumpida de {{packageName}} {{version}}.",
    "changelogHeader": "Cambios en {{version}}:",
    "changelogEmpty": "Esta versión no tiene registro de cambios.",
    "kindHeader": "Tipo",
    "descriptionHeader": "Descripción",
    "actionAdded": "Añadido",
    "actionRemoved": "Eliminado",
    "actionFixed": "Arreglado",
    "notes": "Notas",
    "userCancelled": "Operación cancelada por el usuario.",
    "resumeDownload": "La última descarga de {{packageName}} se interrumpió.",
    "resumePrompt": "¿Quieres reanudarla?",
    "firstTimeCancel": "Descarga cancelada. Ejecuta el actualizador cuando quieras.",
    "updateCancel": "Actualización cancelada.",
    "apiError": "No se pudo contactar con el servicio de versiones.",
    "noPackages": "El servicio de versiones no devolvió paquetes instalables.",
    "unknownPackage": "{{packageName}} no es un paquete instalable.",
    "downloadError": "La descarga falló. Ejecuta el actualizador de nuevo para reanudarla.",
    "backupError": "No se pudo crear la copia de seguridad; no se cambió nada.",
    "configReadError": "No se pudo leer el archivo de estado.",
    "unexpectedError": "Ocurrió un error inesperado.",
}

_PLACEHOLDER = re.compile(r"\{\{(packageName|version|url)\}\}")

CATALOGS: Dict[str, Dict[str, str]] = {"en": EN, "es": ES}


class Messages(Mapping):
    """Read-only catalog for one language with per-key English fallback.

    Indexing never raises: ``messages[key]`` for a key missing from every
    catalog returns ``key`` itself. Use ``key in messages`` or
    :meth:`get` with a default to tell missing keys apart.
    """

    def __init__(self, language: str = "en") -> None:
        self.language = (language or "en").split("_")[0].split("-")[0].lower()
        merged = dict(EN)
        merged.update(CATALOGS.get(self.language, {}))
        self._data = merged

    def __getitem__(self, key: str) -> str:
        # unknown keys render as themselves so a missing entry is visible
        return self._data.get(key, key)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def get(self, key, default=None):
        return self._data.get(key, default)

    def __iter__(self):
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def fill(self, key: str, package_name: str = "", version: str = "", url: str = "") -> str:
        """Look up ``key`` and fill its placeholders."""
        return fill_placeholders(self[key], package_name, version, url)


def fill_placeholders(
    template: str, package_name: str = "", version: str = "", url: str = ""
) -> str:
    """Substitute the first occurrence of each recognized placeholder.

    Substitution is single-pass per token: a value containing another
    placeholder is not expanded again, and repeated tokens stay literal
    after the first.
    """
    values = {"packageName": package_name, "version": version, "url": url}
    seen = set()

    def _sub(match: "re.Match[str]") -> str:
        name = match.group(1)
        if name in seen:
            return match.group(0)
        seen.add(name)
        return values[name] or ""

    return _PLACEHOLDER.sub(_sub, template)


def load_messages(language: str) -> Messages:
    return Messages(language)


__all__ = ["EN", "ES", "CATALOGS", "Messages", "fill_placeholders", "load_messages"]
