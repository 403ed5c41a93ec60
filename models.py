from flask_sqlalchemy import SQLAlchemy
from datetime import datetime

db = SQLAlchemy()


def _isoformat(value):
    return value.isoformat() if value is not None else None


class Cronograma(db.Model):
    __tablename__ = 'cronograma'

    id_cronograma_PK = db.Column(db.Integer, primary_key=True)
    id_usuario_FK = db.Column(db.Integer, nullable=False, default=1)
    titulo = db.Column(db.String(255), nullable=False)
    fecha = db.Column(db.DateTime, nullable=False)
    tareas = db.relationship('TareaCronograma', backref='cronograma', lazy=True)

    def to_dict(self):
        return {
            'id_cronograma_PK': self.id_cronograma_PK,
            'id_usuario_FK': self.id_usuario_FK,
            'titulo': self.titulo,
            'fecha': _isoformat(self.fecha),
        }

    def __repr__(self):
        return f'<Cronograma {self.titulo}>'


class Project(db.Model):
    __tablename__ = 'projects'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    descripcion = db.Column(db.Text)
    status = db.Column(db.Integer, nullable=False, default=1)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'descripcion': self.descripcion,
            'status': self.status,
            'created_at': _isoformat(self.created_at),
        }

    def __repr__(self):
        return f'<Project {self.name}>'


class TareaCronograma(db.Model):
    __tablename__ = 'tarea_cronograma'

    id_tarea_cronograma_PK = db.Column(db.Integer, primary_key=True)
    id_cronograma_FK = db.Column(db.Integer, db.ForeignKey('cronograma.id_cronograma_PK'), nullable=False)
    descripcion = db.Column(db.Text)
    hora = db.Column(db.Integer, nullable=False, default=0)
    minuto = db.Column(db.Integer, nullable=False, default=0)
    meridiano = db.Column(db.String(2), default='AM')  # deprecated, hora is military time
    estado = db.Column(db.Integer, nullable=False, default=0)
    project_id = db.Column(db.Integer, db.ForeignKey('projects.id'), nullable=True)
    order = db.Column('order', db.Integer, nullable=False)

    def to_dict(self):
        return {
            'id_tarea_cronograma_PK': self.id_tarea_cronograma_PK,
            'id_cronograma_FK': self.id_cronograma_FK,
            'descripcion': self.descripcion,
            'hora': self.hora,
            'minuto': self.minuto,
            'meridiano': self.meridiano,
            'estado': self.estado,
            'project_id': self.project_id,
            'order': self.order,
        }

    def __repr__(self):
        return f'<TareaCronograma {self.order}: {self.descripcion}>'
