"""Сервисы: разметка, аудио, пакетный прогон, экспорт."""
