import json
import os
from pathlib import Path
from urllib.parse import urlparse

import requests
from django.core.files.base import ContentFile
from django.core.management.base import BaseCommand, CommandError

from HUMPIZZA.models import MenuItem


class Command(BaseCommand):
    help = "Tải ảnh món ăn từ file JSON ([{name, image}]) cho các món chưa có ảnh"

    def add_arguments(self, parser):
        parser.add_argument("json_path", nargs="?", default="menu.json")
        parser.add_argument("--timeout", type=int, default=15)

    def handle(self, *args, **options):
        json_path = Path(options["json_path"])
        if not json_path.exists():
            raise CommandError(f"Không tìm thấy file {json_path}")

        with json_path.open("r", encoding="utf-8") as f:
            data = json.load(f)

        saved = skipped = failed = 0
        for entry in data:
            name = entry.get("name") or entry.get("ten_mon")
            img_url = entry.get("image") or entry.get("img")
            if not name or not img_url:
                skipped += 1
                continue

            item = MenuItem.objects.filter(name=name).first()
            if item is None:
                self.stderr.write(f"Không tìm thấy món '{name}' trong database")
                failed += 1
                continue
            # Món đã có ảnh thì bỏ qua
            if item.image or item.image_url:
                skipped += 1
                continue

            try:
                response = requests.get(img_url, timeout=options["timeout"])
            except requests.RequestException as e:
                self.stderr.write(f"Lỗi tải ảnh cho {name}: {e}")
                failed += 1
                continue
            if response.status_code != 200:
                self.stderr.write(f"Link ảnh lỗi ({response.status_code}): {img_url}")
                failed += 1
                continue

            file_name = os.path.basename(urlparse(img_url).path) or f"menu-{item.pk}.jpg"
            item.image.save(file_name, ContentFile(response.content), save=True)
            saved += 1
            self.stdout.write(f"Đã lưu ảnh cho {name}: {file_name}")

        self.stdout.write(self.style.SUCCESS(
            f"Import done: saved={saved}, skipped={skipped}, failed={failed}"
        ))
