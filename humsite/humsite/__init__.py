import pymysql

# Dùng PyMySQL thay cho mysqlclient khi DB_ENGINE=mysql
pymysql.version_info = (2, 2, 1, "final", 0)
pymysql.install_as_MySQLdb()
