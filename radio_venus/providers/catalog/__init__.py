from radio_venus.providers.catalog.wikidata_catalog_provider import WikidataCatalogProvider

__all__ = ["WikidataCatalogProvider"]
