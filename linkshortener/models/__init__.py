from linkshortener.models.url_mapping_model import UrlMappingModel


__all__ = ['UrlMappingModel']
